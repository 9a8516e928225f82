import argparse
from pathlib import Path

import store
from config import ADMIN_PASSWORD, DB_PATH
from database import bootstrap_schema, get_connection, remove_database
from models import Post, User, UserRole

ADMIN_NAME = "admin"

DEMO_USERS = [
    ("birdwatcher", "tweet-tweet"),
    ("nightowl", "hoot1447"),
]

DEMO_POSTS = [
    ("birdwatcher", "First tweet! Anyone else up this early?"),
    ("nightowl", "Just set up my bio, go check out my profile."),
]


def seed_admin(conn, password):
    """Create the administrator account unless one with that name already exists."""
    try:
        return store.get_user_by_name(conn, ADMIN_NAME)
    except store.NotFoundError:
        admin = User.new(ADMIN_NAME, password, UserRole.ADMIN, blue=True)
        return store.add_user(conn, admin)


def seed_demo(conn):
    for name, password in DEMO_USERS:
        try:
            store.add_user(conn, User.new(name, password))
        except store.UserExistsError:
            continue

    if store.num_posts(conn):
        return
    for name, contents in DEMO_POSTS:
        author = store.get_user_by_name(conn, name)
        store.add_post(conn, Post.new(author, contents))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Initialize or update the Tweeter database.")
    parser.add_argument(
        "--db",
        type=Path,
        default=DB_PATH,
        help="Path to the SQLite file (default: %(default)s)",
    )
    parser.add_argument(
        "--admin-password",
        default=ADMIN_PASSWORD,
        help="Password for the seeded admin account.",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Add a couple of ordinary users and posts.",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop the existing SQLite file before seeding (wipes every account and post).",
    )
    args = parser.parse_args(argv)

    if args.reset:
        remove_database(args.db)
        print("Existing database removed.")

    conn = get_connection(args.db)
    bootstrap_schema(conn)
    seed_admin(conn, args.admin_password)
    if args.demo:
        seed_demo(conn)
    users, posts = store.num_users(conn), store.num_posts(conn)
    conn.close()
    print(f"Database initialized/updated at {args.db} ({users} users, {posts} posts)")


if __name__ == "__main__":
    main()
