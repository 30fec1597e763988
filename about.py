# about.py
from flask import Blueprint, render_template

about_bp = Blueprint("about", __name__)

@about_bp.get("/", strict_slashes=False)
def page():
    return render_template("about.html")
