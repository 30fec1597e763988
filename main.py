import os
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from flask import Flask, send_from_directory
from werkzeug.middleware.proxy_fix import ProxyFix

from posts import PostDataError, load_posts

# ---------------- Config ----------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL)
log = logging.getLogger("blog")

ROOT_DIR = Path(__file__).resolve().parent
DATA_DIR = ROOT_DIR / "data"

SITE_NAME = os.getenv("SITE_NAME", "Clean Blog")
BASE_PATH = os.getenv("BASE_PATH", "")
BLOG_POSTS_PATH = os.getenv("BLOG_POSTS_PATH", str(DATA_DIR / "blog-posts.json"))


# -------------- App factory --------------
def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    # public/ is the general static root, served at /
    app = Flask(__name__, static_folder="public", static_url_path="")
    app.config.update(
        SITE_NAME=SITE_NAME,
        BASE_PATH=BASE_PATH,
        BLOG_POSTS_PATH=BLOG_POSTS_PATH,
    )
    if overrides:
        app.config.update(overrides)

    posts_path = app.config["BLOG_POSTS_PATH"]
    try:
        posts = load_posts(posts_path)
    except PostDataError as exc:
        log.error("Failed to load blog posts: %s", exc)
        raise
    if not posts:
        log.warning("Posts file %s holds no posts; /post will answer 404", posts_path)
    log.info("Loaded %d blog posts from %s", len(posts), posts_path)
    app.config["BLOG_POSTS"] = posts

    # -------------- Template helpers --------------
    @app.context_processor
    def inject_helpers():
        base_path = app.config["BASE_PATH"]

        def bp(path: str) -> str:
            if path.startswith(("http://", "https://", "//", "data:")):
                return path
            base = (base_path or "").rstrip("/")
            if not path.startswith("/"):
                path = "/" + path
            return (base + path) or "/"

        return dict(
            bp=bp,
            BASE_PATH=base_path,
            SITE_NAME=app.config["SITE_NAME"],
        )

    # -------------- Static assets --------------
    @app.get("/<any(css, js, assets):folder>/<path:filename>")
    def asset(folder: str, filename: str):
        return send_from_directory(ROOT_DIR / folder, filename)

    # ---- Blueprints ----
    from blog_routes import blog_bp
    app.register_blueprint(blog_bp)

    from about import about_bp
    app.register_blueprint(about_bp, url_prefix="/about")

    from contact import contact_bp
    app.register_blueprint(contact_bp, url_prefix="/contact")

    # Trust the reverse proxy so scheme/host are correct
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    return app


app = create_app()


# ---------------------------------------------------------------
if __name__ == "__main__":
    port = int(os.getenv("PORT", 3000))
    log.info("Server is running on http://localhost:%d", port)
    app.run(host="0.0.0.0", port=port, debug=False)
