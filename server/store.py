import sqlite3

from models import Post, User


class StoreError(Exception):
    pass


class UserExistsError(StoreError):
    pass


class NotFoundError(StoreError):
    pass


def num_users(conn) -> int:
    return conn.execute("SELECT COUNT(*) AS total FROM users").fetchone()["total"]


def add_user(conn, user: User) -> User:
    try:
        with conn:
            cursor = conn.execute(
                """
                INSERT INTO users (name, password_hash, role, blue, bio)
                VALUES (?, ?, ?, ?, ?)
                """,
                (user.name, user.password_hash, user.role.value, int(user.blue), user.bio),
            )
    except sqlite3.IntegrityError as exc:
        raise UserExistsError(f"user with name {user.name} already exists") from exc
    user.id = cursor.lastrowid
    return user


def update_user(conn, user: User):
    # matched by name, the id on the object is ignored
    with conn:
        cursor = conn.execute(
            """
            UPDATE users
            SET password_hash = ?, role = ?, blue = ?, bio = ?
            WHERE name = ?
            """,
            (user.password_hash, user.role.value, int(user.blue), user.bio, user.name),
        )
    if cursor.rowcount == 0:
        raise NotFoundError(f"user with name {user.name} not found")


def get_user_by_id(conn, user_id: int) -> User:
    row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
    if row is None:
        raise NotFoundError(f"user with id {user_id} not found")
    return User.from_row(row)


def get_user_by_name(conn, name: str) -> User:
    row = conn.execute("SELECT * FROM users WHERE name = ?", (name,)).fetchone()
    if row is None:
        raise NotFoundError(f"user with name {name} not found")
    return User.from_row(row)


def get_users(conn):
    rows = conn.execute("SELECT * FROM users ORDER BY id").fetchall()
    return [User.from_row(row) for row in rows]


def num_posts(conn) -> int:
    return conn.execute("SELECT COUNT(*) AS total FROM posts").fetchone()["total"]


def add_post(conn, post: Post) -> Post:
    with conn:
        cursor = conn.execute(
            "INSERT INTO posts (author_id, contents, timestamp) VALUES (?, ?, ?)",
            (post.author_id, post.contents, post.timestamp),
        )
    post.id = cursor.lastrowid
    return post


def update_post(conn, post: Post):
    with conn:
        cursor = conn.execute(
            "UPDATE posts SET author_id = ?, contents = ?, timestamp = ? WHERE id = ?",
            (post.author_id, post.contents, post.timestamp, post.id),
        )
    if cursor.rowcount == 0:
        raise NotFoundError(f"post with id {post.id} not found")


def get_posts(conn):
    rows = conn.execute("SELECT * FROM posts ORDER BY id").fetchall()
    return [Post.from_row(row) for row in rows]


def delete_post_by_id(conn, post_id: int):
    with conn:
        cursor = conn.execute("DELETE FROM posts WHERE id = ?", (post_id,))
    if cursor.rowcount == 0:
        raise NotFoundError(f"post with id {post_id} not found")
