import argparse
import logging
from datetime import datetime
from functools import wraps
from urllib.parse import quote

from flask import (
    Flask,
    abort,
    g,
    redirect,
    render_template,
    request,
    url_for,
)

import store
from config import ADMIN_PASSWORD, DB_PATH, HOST, LOG_LEVEL, PORT, SECRET_KEY, TIME_FORMAT
from database import bootstrap_schema, get_connection
from init_db import seed_admin
from models import IncorrectPasswordError, Post, User
from session_cookie import COOKIE_NAME, clear_user_cookie, read_username, set_user_cookie

app = Flask(__name__, template_folder="views", static_folder="assets", static_url_path="/assets")
app.config["SECRET_KEY"] = SECRET_KEY
app.config["DATABASE"] = DB_PATH
app.config["ADMIN_PASSWORD"] = ADMIN_PASSWORD

BLUE_COMMANDS = {
    "GrantBlue": True,
    "RemoveBlue": False,
}


def configure_logging(level=LOG_LEVEL):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def prepare_database(path, admin_password):
    conn = get_connection(path)
    try:
        bootstrap_schema(conn)
        seed_admin(conn, admin_password)
    finally:
        conn.close()


def encoded_location(path, message):
    return f"{path}{quote(message, safe='')}"


def cookie_username():
    return read_username(app.config["SECRET_KEY"], request.cookies.get(COOKIE_NAME))


def current_user():
    username = cookie_username()
    if username is None:
        return None
    try:
        return store.get_user_by_name(g.db, username)
    except store.NotFoundError:
        return None


def login_required(func):
    """Hand the logged-in ``User`` to the view, or bounce to /login or /logout."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        username = cookie_username()
        if username is None:
            return redirect(url_for("login"))
        try:
            user = store.get_user_by_name(g.db, username)
        except store.NotFoundError:
            # signed by us, but the account is gone (e.g. the database was reset)
            return redirect(url_for("logout"))
        return func(user, *args, **kwargs)

    return wrapper


def admin_required(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None or not user.is_admin:
            app.logger.warning("Rejected admin request for %s from %s", request.path, request.remote_addr)
            abort(401)
        return func(*args, **kwargs)

    return wrapper


@app.template_filter("format_time")
def format_time(timestamp):
    return datetime.fromtimestamp(int(timestamp)).strftime(TIME_FORMAT)


@app.before_request
def attach_db():
    g.db = get_connection(app.config["DATABASE"])


@app.teardown_request
def close_db(_):
    db = getattr(g, "db", None)
    if db is not None:
        db.close()


@app.after_request
def trace_request(response):
    app.logger.debug("%s %s -> %s", request.method, request.path, response.status_code)
    return response


@app.errorhandler(401)
def unauthorized(_):
    return "unauthorized", 401


@app.route("/")
def index():
    posts = store.get_posts(g.db)
    posts.reverse()
    user_map = {user.id: user for user in store.get_users(g.db)}
    return render_template(
        "index.html",
        user=current_user(),
        user_map=user_map,
        posts=posts,
    )


@app.route("/register", methods=["GET", "POST"])
def register():
    if request.method == "GET":
        if cookie_username() is not None:
            return redirect(url_for("index"))
        return render_template("register.html")

    response = redirect(url_for("index"))
    if cookie_username() is None:
        username = request.form["username"]
        new_user = User.new(username, request.form["password"])
        try:
            store.add_user(g.db, new_user)
        except store.UserExistsError as exc:
            app.logger.info("Registration refused: %s", exc)
            return redirect(encoded_location("/register#", f"failed to add user: {exc}"))
        app.logger.info("Registered user %s (id %s)", new_user.name, new_user.id)
        set_user_cookie(response, app.config["SECRET_KEY"], username)
    return response


@app.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "GET":
        if cookie_username() is not None:
            return redirect(url_for("index"))
        return render_template("login.html", err=request.args.get("err"))

    response = redirect(url_for("index"))
    if cookie_username() is None:
        username = request.form["username"]
        password = request.form["password"]
        try:
            user = store.get_user_by_name(g.db, username)
        except store.NotFoundError:
            user = None
        if user is None or not user.check_password(password):
            app.logger.warning("Failed login for %s from %s", username, request.remote_addr)
            return redirect(encoded_location("/login?err=", "incorrect username/password"))
        set_user_cookie(response, app.config["SECRET_KEY"], user.name)
    return response


@app.route("/logout", methods=["GET", "POST"])
def logout():
    return clear_user_cookie(redirect(url_for("index")))


@app.route("/create_post", methods=["GET"])
def create_post():
    if cookie_username() is None:
        return redirect(url_for("login"))
    return render_template("create_post.html")


@app.route("/create_post", methods=["POST"])
@login_required
def submit_post(user):
    post = Post.new(user, request.form["contents"])
    store.add_post(g.db, post)
    return redirect(url_for("index"))


@app.route("/profile/<int:user_id>")
def profile(user_id):
    try:
        user = store.get_user_by_id(g.db, user_id)
    except store.NotFoundError:
        return f"no user with id {user_id}", 404
    return render_template("profile.html", user=user)


@app.route("/settings", methods=["GET"])
@login_required
def settings(user):
    return render_template(
        "settings.html",
        user=user,
        err=request.args.get("err"),
        success=request.args.get("success"),
    )


@app.route("/settings", methods=["POST"])
@login_required
def update_settings(user):
    new_password = request.form["newpass"]
    if new_password:
        try:
            user.change_password(request.form["currpass"], new_password)
        except IncorrectPasswordError as exc:
            return redirect(encoded_location("/settings?err=", str(exc)))
        app.logger.info("Password changed for %s", user.name)
    user.set_bio(request.form["bio"])
    store.update_user(g.db, user)
    app.logger.info("Updated settings for %s", user.name)
    return redirect(encoded_location("/settings?success=", "Successfully updated settings"))


@app.route("/admin")
@admin_required
def admin_panel():
    return render_template("admin/index.html")


@app.route("/admin/users", methods=["GET"])
@admin_required
def admin_users():
    return render_template("admin/users.html", users=store.get_users(g.db))


@app.route("/admin/users", methods=["POST"])
@admin_required
def admin_update_user():
    user_id = request.form.get("id", type=int)
    blue = BLUE_COMMANDS.get(request.form.get("cmd", ""))
    if user_id is None or blue is None:
        abort(400)
    try:
        user = store.get_user_by_id(g.db, user_id)
    except store.NotFoundError:
        abort(400)
    user.set_blue(blue)
    store.update_user(g.db, user)
    app.logger.info("Set blue=%s for %s", blue, user.name)
    return redirect(url_for("admin_users"))


def main():
    parser = argparse.ArgumentParser(description="Run the Tweeter web application.")
    parser.add_argument("--host", default=HOST, help="Address to bind (default: %(default)s)")
    parser.add_argument("--port", type=int, default=PORT, help="Port to bind (default: %(default)s)")
    parser.add_argument("--debug", action="store_true", help="Enable the Flask debugger and reloader.")
    args = parser.parse_args()

    configure_logging("DEBUG" if args.debug else LOG_LEVEL)
    prepare_database(app.config["DATABASE"], app.config["ADMIN_PASSWORD"])
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
