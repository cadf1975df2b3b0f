"""
In-memory data store for users, mail server settings, emails, categories and
reply templates.

Every ``MemStorage`` owns a private in-memory SQLite database, one table per
entity. Nothing is written to disk: a restart, or simply building a new
``MemStorage``, starts from an empty store.

Lookups never raise for a missing record, they return ``None`` (``False`` for
deletes) and leave it to the caller to decide what that means.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping

from pydantic.alias_generators import to_camel
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from webmail.db.models import Base, User, EmailServer, Email, Category, Template
from webmail.db.session import create_memory_engine

logger = logging.getLogger(__name__)

# fields an update may never touch
_IMMUTABLE = {"id", "user_id"}

UserHook = Callable[[Session, User], None]


DEFAULT_CATEGORIES = [
    {
        "name": "Classes",
        "color": "#2196F3",
        "icon": "school",
        "rules": [{"field": "from", "operator": "contains", "value": "professor"}],
    },
    {
        "name": "Administration",
        "color": "#FFC107",
        "icon": "admin_panel_settings",
        "rules": [{"field": "from", "operator": "contains", "value": "admin"}],
    },
    {
        "name": "Events",
        "color": "#4CAF50",
        "icon": "event",
        "rules": [{"field": "subject", "operator": "contains", "value": "event"}],
    },
]


def seed_default_categories(db: Session, user: User) -> None:
    for default in DEFAULT_CATEGORIES:
        db.add(Category(user_id=user.id, **default))


def _field_names(model) -> dict[str, str]:
    """
    Map every accepted key (attribute name and wire alias) to the attribute name.
    """
    names = {}
    for attr in model.__mapper__.column_attrs:
        alias = attr.columns[0].info.get("alias") or to_camel(attr.key)
        names[attr.key] = attr.key
        names[alias] = attr.key
    return names


def _columns(model, data: Mapping[str, Any]) -> dict[str, Any]:
    names = _field_names(model)
    return {names[k]: v for k, v in data.items() if k in names}


def _naive_utc(value):
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class MemStorage:
    def __init__(self, engine: Engine | None = None, user_hooks: Iterable[UserHook] | None = None):
        self.engine = engine or create_memory_engine()
        Base.metadata.create_all(bind=self.engine)
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)

        # run in the user's insert transaction; a failing hook aborts the registration
        self.user_hooks = list(user_hooks) if user_hooks is not None else [seed_default_categories]

    # ---------------- generic ----------------

    def _get(self, model, id: int):
        with self.SessionLocal() as db:
            return db.get(model, id)

    def _list(self, model, user_id: int):
        with self.SessionLocal() as db:
            q = select(model).where(model.user_id == user_id).order_by(model.id)
            return list(db.execute(q).scalars().all())

    def _create(self, model, data: Mapping[str, Any], **forced):
        fields = _columns(model, data)
        fields.pop("id", None)
        fields.update(forced)

        with self.SessionLocal() as db:
            row = model(**fields)
            db.add(row)
            db.commit()
            logger.info(f"created {model.__tablename__} id={row.id}")
            return row

    def _update(self, model, id: int, updates: Mapping[str, Any]):
        with self.SessionLocal() as db:
            row = db.get(model, id)
            if row is None:
                return None

            for key, value in _columns(model, updates).items():
                if key in _IMMUTABLE:
                    continue
                setattr(row, key, value)

            db.commit()
            return row

    def _delete(self, model, id: int) -> bool:
        with self.SessionLocal() as db:
            row = db.get(model, id)
            if row is None:
                return False

            db.delete(row)
            db.commit()
            logger.info(f"deleted {model.__tablename__} id={id}")
            return True

    # ---------------- users ----------------

    def get_user(self, id: int) -> User | None:
        return self._get(User, id)

    def get_user_by_username(self, username: str) -> User | None:
        with self.SessionLocal() as db:
            return db.execute(
                select(User).where(User.username == username)
            ).scalar_one_or_none()

    def create_user(self, data: Mapping[str, Any]) -> User:
        fields = _columns(User, data)
        fields.pop("id", None)
        fields["settings"] = {}

        with self.SessionLocal() as db:
            user = User(**fields)
            db.add(user)
            db.flush()

            for hook in self.user_hooks:
                hook(db, user)

            db.commit()
            logger.info(f"created users id={user.id} username={user.username}")
            return user

    def update_user_settings(self, id: int, settings: Mapping[str, Any]) -> User | None:
        with self.SessionLocal() as db:
            user = db.get(User, id)
            if user is None:
                return None

            # new dict so the JSON column sees the change
            user.settings = {**(user.settings or {}), **settings}
            db.commit()
            return user

    # ---------------- email servers ----------------

    def get_email_servers(self, user_id: int) -> list[EmailServer]:
        return self._list(EmailServer, user_id)

    def get_email_server(self, id: int) -> EmailServer | None:
        return self._get(EmailServer, id)

    def create_email_server(self, data: Mapping[str, Any]) -> EmailServer:
        return self._create(EmailServer, data)

    def update_email_server(self, id: int, updates: Mapping[str, Any]) -> EmailServer | None:
        return self._update(EmailServer, id, updates)

    def delete_email_server(self, id: int) -> bool:
        return self._delete(EmailServer, id)

    # ---------------- emails ----------------

    def get_emails(self, user_id: int, folder: str | None = None, category: str | None = None) -> list[Email]:
        """
        Newest first; emails received at the same instant keep id order.
        """
        with self.SessionLocal() as db:
            q = select(Email).where(Email.user_id == user_id)

            if folder:
                q = q.where(Email.folder == folder)

            q = q.order_by(Email.received.desc(), Email.id.asc())
            rows = db.execute(q).scalars().all()

        if category:
            rows = [e for e in rows if category in (e.categories or [])]

        return list(rows)

    def get_email(self, id: int) -> Email | None:
        return self._get(Email, id)

    def create_email(self, data: Mapping[str, Any]) -> Email:
        received = _naive_utc(_columns(Email, data).get("received"))
        # new mail always arrives unread and unstarred
        return self._create(Email, data, received=received, read=False, starred=False)

    def update_email(self, id: int, updates: Mapping[str, Any]) -> Email | None:
        fields = _columns(Email, updates)
        if "received" in fields:
            fields["received"] = _naive_utc(fields["received"])
        return self._update(Email, id, fields)

    def delete_email(self, id: int) -> bool:
        return self._delete(Email, id)

    def mark_email_read(self, id: int, read: bool) -> Email | None:
        return self.update_email(id, {"read": read})

    def mark_email_starred(self, id: int, starred: bool) -> Email | None:
        return self.update_email(id, {"starred": starred})

    def move_email_to_folder(self, id: int, folder: str) -> Email | None:
        return self.update_email(id, {"folder": folder})

    # ---------------- categories ----------------

    def get_categories(self, user_id: int) -> list[Category]:
        return self._list(Category, user_id)

    def get_category(self, id: int) -> Category | None:
        return self._get(Category, id)

    def create_category(self, data: Mapping[str, Any]) -> Category:
        return self._create(Category, data)

    def update_category(self, id: int, updates: Mapping[str, Any]) -> Category | None:
        return self._update(Category, id, updates)

    def delete_category(self, id: int) -> bool:
        return self._delete(Category, id)

    # ---------------- templates ----------------

    def get_templates(self, user_id: int) -> list[Template]:
        return self._list(Template, user_id)

    def get_template(self, id: int) -> Template | None:
        return self._get(Template, id)

    def create_template(self, data: Mapping[str, Any]) -> Template:
        return self._create(Template, data)

    def update_template(self, id: int, updates: Mapping[str, Any]) -> Template | None:
        return self._update(Template, id, updates)

    def delete_template(self, id: int) -> bool:
        return self._delete(Template, id)
