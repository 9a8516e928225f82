"""Users and posts, built from sqlite rows."""
import time
from dataclasses import dataclass
from enum import Enum

from werkzeug.security import check_password_hash, generate_password_hash


class UserRole(str, Enum):
    USER = "User"
    ADMIN = "Admin"


class IncorrectPasswordError(Exception):
    pass


@dataclass
class User:
    name: str
    password_hash: str
    role: UserRole = UserRole.USER
    blue: bool = False
    bio: str = ""
    id: int = 0

    @classmethod
    def new(cls, name: str, password: str, role=UserRole.USER, blue=False):
        return cls(name=name, password_hash=generate_password_hash(password), role=role, blue=blue)

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row["id"],
            name=row["name"],
            password_hash=row["password_hash"],
            role=UserRole(row["role"]),
            blue=bool(row["blue"]),
            bio=row["bio"],
        )

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def change_password(self, current: str, new: str):
        if not self.check_password(current):
            raise IncorrectPasswordError("incorrect password")
        self.password_hash = generate_password_hash(new)

    def set_bio(self, bio: str):
        self.bio = bio

    def set_role(self, role: UserRole):
        self.role = role

    def set_blue(self, blue: bool):
        self.blue = blue


@dataclass
class Post:
    author_id: int
    contents: str
    timestamp: int = 0
    id: int = 0

    @classmethod
    def new(cls, author: User, contents: str):
        return cls(author_id=author.id, contents=contents, timestamp=int(time.time()))

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row["id"],
            author_id=row["author_id"],
            contents=row["contents"],
            timestamp=row["timestamp"],
        )
