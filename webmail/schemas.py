from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from webmail.config import DEFAULT_FOLDER


class ApiModel(BaseModel):
    # camelCase on the wire, snake_case in python, ORM rows accepted as input
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


ServerType = Literal["auto", "outlook", "gmail", "custom"]
Port = Annotated[int, Field(ge=1, le=65535)]


# ================== CREATE BODIES ==================

class UserCreate(ApiModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    email_address: EmailStr
    display_name: Optional[str] = None


class EmailServerCreate(ApiModel):
    user_id: int
    server_type: ServerType
    imap_server: Optional[str] = None
    imap_port: Optional[Port] = None
    smtp_server: Optional[str] = None
    smtp_port: Optional[Port] = None
    use_ssl: bool = Field(True, alias="useSSL")

    # open map, the UI sends {"email": ..., "password": ...}
    credentials: dict[str, Any] = Field(default_factory=dict)


class Attachment(ApiModel):
    name: str
    type: str
    size: int = Field(..., ge=0)


class EmailCreate(ApiModel):
    user_id: int
    message_id: str = Field(..., min_length=1)
    from_addr: str = Field(..., alias="from", min_length=1)
    from_name: Optional[str] = None
    to: str = Field(..., min_length=1)
    subject: Optional[str] = None
    body: Optional[str] = None
    body_html: Optional[str] = None
    received: datetime
    folder: str = Field(DEFAULT_FOLDER, min_length=1)
    categories: list[str] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)


class CategoryRule(ApiModel):
    field: str = Field(..., min_length=1)
    operator: str = Field(..., min_length=1)
    value: str


class CategoryCreate(ApiModel):
    user_id: int
    name: str = Field(..., min_length=1)
    color: str = Field(..., pattern=r"^#(?:[0-9a-fA-F]{3}){1,2}$")
    icon: Optional[str] = None
    rules: list[CategoryRule] = Field(default_factory=list)


class TemplateCreate(ApiModel):
    user_id: int
    name: str = Field(..., min_length=1)
    subject: Optional[str] = None
    body: str


# ================== UPDATE BODIES ==================
# every field optional; only the keys sent are merged (model_dump(exclude_unset=True)).
# non-nullable columns keep a plain type so an explicit null is rejected.
# id and userId are not fields here, so they are dropped like any unknown key.

class EmailServerUpdate(ApiModel):
    server_type: ServerType = None
    imap_server: Optional[str] = None
    imap_port: Optional[Port] = None
    smtp_server: Optional[str] = None
    smtp_port: Optional[Port] = None
    use_ssl: bool = Field(None, alias="useSSL")
    credentials: dict[str, Any] = None


class CategoryUpdate(ApiModel):
    name: str = Field(None, min_length=1)
    color: str = Field(None, pattern=r"^#(?:[0-9a-fA-F]{3}){1,2}$")
    icon: Optional[str] = None
    rules: list[CategoryRule] = None


class TemplateUpdate(ApiModel):
    name: str = Field(None, min_length=1)
    subject: Optional[str] = None
    body: str = None


# ================== RESPONSES ==================
# blob fields stay loose here, rows written directly through MemStorage are not validated

class UserOut(ApiModel):
    id: int
    username: str
    display_name: Optional[str] = None
    email_address: str
    settings: Optional[dict[str, Any]] = None


class LoginOut(ApiModel):
    user: UserOut
    message: str


class EmailServerOut(ApiModel):
    id: int
    user_id: int
    server_type: str
    imap_server: Optional[str] = None
    imap_port: Optional[int] = None
    smtp_server: Optional[str] = None
    smtp_port: Optional[int] = None
    use_ssl: Optional[bool] = Field(None, alias="useSSL")
    credentials: Optional[dict[str, Any]] = None


class EmailOut(ApiModel):
    id: int
    user_id: int
    message_id: str
    from_addr: str = Field(..., alias="from")
    from_name: Optional[str] = None
    to: str
    subject: Optional[str] = None
    body: Optional[str] = None
    body_html: Optional[str] = None
    received: datetime
    read: bool
    starred: bool
    folder: Optional[str] = None
    categories: Optional[list[Any]] = None
    labels: Optional[list[Any]] = None
    attachments: Optional[list[Any]] = None

    @field_validator("received")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # stored naive, always UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class CategoryOut(ApiModel):
    id: int
    user_id: int
    name: str
    color: str
    icon: Optional[str] = None
    rules: Optional[list[Any]] = None


class TemplateOut(ApiModel):
    id: int
    user_id: int
    name: str
    subject: Optional[str] = None
    body: str


class MessageOut(BaseModel):
    message: str
