"""Routes for the blog listing and post pages."""

from __future__ import annotations

import logging
from typing import Tuple

from flask import Blueprint, Response, current_app, render_template

from posts import EnrichedPost, find_by_slug, first_post

log = logging.getLogger("blog")

blog_bp = Blueprint("blog", __name__)


def _posts() -> Tuple[EnrichedPost, ...]:
    return current_app.config["BLOG_POSTS"]


def _post_not_found() -> Response:
    return Response("Post not found", status=404, mimetype="text/plain")


@blog_bp.get("/")
def index() -> str:
    """Render the home page listing every post in source order."""

    return render_template("index.html", posts=_posts())


@blog_bp.get("/post")
def sample_post():
    """Render the first post as a sample."""

    post = first_post(_posts())
    if post is None:
        return _post_not_found()
    return render_template("post.html", post=post)


@blog_bp.get("/post/<slug>")
def post_detail(slug: str):
    post = find_by_slug(_posts(), slug)
    if post is None:
        log.debug("No post with slug %r", slug)
        return _post_not_found()
    return render_template("post.html", post=post)
