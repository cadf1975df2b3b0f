from datetime import datetime
from sqlalchemy import String, DateTime, Text, Integer, Boolean, ForeignKey, JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from webmail.config import DEFAULT_FOLDER


class Base(DeclarativeBase):
    pass


# AUTOINCREMENT keeps sqlite from handing out the id of a deleted row again
_TABLE_ARGS = {"sqlite_autoincrement": True}


class User(Base):
    __tablename__ = "users"
    __table_args__ = _TABLE_ARGS

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(128), unique=True, index=True)

    # plaintext, compared as-is on login
    password: Mapped[str] = mapped_column(String(256))

    display_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    email_address: Mapped[str] = mapped_column(String(256))

    # open key/value map owned by the UI (theme, signature, ...)
    settings: Mapped[dict] = mapped_column(JSON, default=dict)


class EmailServer(Base):
    __tablename__ = "email_servers"
    __table_args__ = _TABLE_ARGS

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), index=True)

    # auto | outlook | gmail | custom
    server_type: Mapped[str] = mapped_column(String(32))

    imap_server: Mapped[str | None] = mapped_column(String(256), nullable=True)
    imap_port: Mapped[int | None] = mapped_column(Integer, nullable=True)
    smtp_server: Mapped[str | None] = mapped_column(String(256), nullable=True)
    smtp_port: Mapped[int | None] = mapped_column(Integer, nullable=True)
    use_ssl: Mapped[bool] = mapped_column(Boolean, default=True, info={"alias": "useSSL"})

    # {"email": "...", "password": "..."}
    credentials: Mapped[dict] = mapped_column(JSON, default=dict)


class Email(Base):
    __tablename__ = "emails"
    __table_args__ = _TABLE_ARGS

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), index=True)

    # RFC Message-ID
    message_id: Mapped[str] = mapped_column(String(512))

    from_addr: Mapped[str] = mapped_column(String(512), info={"alias": "from"})
    from_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    to: Mapped[str] = mapped_column(String(512))

    subject: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    body_html: Mapped[str | None] = mapped_column(Text, nullable=True)

    # naive UTC
    received: Mapped[datetime] = mapped_column(DateTime, index=True)

    read: Mapped[bool] = mapped_column(Boolean, default=False)
    starred: Mapped[bool] = mapped_column(Boolean, default=False)
    folder: Mapped[str] = mapped_column(String(64), default=DEFAULT_FOLDER)

    # category names, matched against Category.name by string equality
    categories: Mapped[list] = mapped_column(JSON, default=list)
    labels: Mapped[list] = mapped_column(JSON, default=list)

    # [{"name": "syllabus.pdf", "type": "application/pdf", "size": 48213}]
    attachments: Mapped[list] = mapped_column(JSON, default=list)


class Category(Base):
    __tablename__ = "categories"
    __table_args__ = _TABLE_ARGS

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), index=True)

    name: Mapped[str] = mapped_column(String(128))
    color: Mapped[str] = mapped_column(String(16))
    icon: Mapped[str | None] = mapped_column(String(64), nullable=True)

    # [{"field": "from", "operator": "contains", "value": "professor"}]
    # stored for the UI, never evaluated server side
    rules: Mapped[list] = mapped_column(JSON, default=list)


class Template(Base):
    __tablename__ = "templates"
    __table_args__ = _TABLE_ARGS

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), index=True)

    name: Mapped[str] = mapped_column(String(128))
    subject: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    body: Mapped[str] = mapped_column(Text)
