from werkzeug.security import check_password_hash, generate_password_hash

from storefront.extensions import db
from storefront.models.base import ArchivableMixin, isoformat, utcnow


class User(ArchivableMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    username = db.Column(db.String(100), nullable=False, index=True)
    email = db.Column(db.String(255), nullable=False)
    password = db.Column(db.String(255), nullable=False)
    is_admin = db.Column(db.Boolean, nullable=False, default=False)
    password_last_changed_on = db.Column(db.DateTime(timezone=True))

    __table_args__ = (
        db.Index(
            "uq_users_active_username",
            "username",
            unique=True,
            postgresql_where=db.text("archived_on IS NULL"),
            sqlite_where=db.text("archived_on IS NULL"),
        ),
    )

    def set_password(self, raw_password):
        self.password = generate_password_hash(raw_password)
        if self.id is not None:
            self.password_last_changed_on = utcnow()

    def check_password(self, raw_password):
        return check_password_hash(self.password, raw_password or "")

    def to_dict(self):
        # the password hash never leaves the service
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "username": self.username,
            "email": self.email,
            "is_admin": self.is_admin,
            "password_last_changed_on": isoformat(self.password_last_changed_on),
            **self.housekeeping_dict(),
        }

    def __repr__(self):
        return f"<User {self.username}>"
