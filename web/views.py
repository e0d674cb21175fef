"""Product routes. Each one renders an HTML fragment swapped into the page."""

import logging

from flask import Blueprint, Response, current_app, render_template, request

from catalog.service import CatalogService

from .forms import product_from_form

__all__ = ["products"]

logger = logging.getLogger(__name__)

products = Blueprint("products", __name__)


def _service() -> CatalogService:
    return current_app.extensions["catalog"]


@products.route("/", methods=["GET"])
def index() -> str:
    """Render the main catalog page."""
    return render_template("index.html")


@products.route("/products/table", methods=["GET"])
def products_table() -> str:
    """Sorted product table fragment, optionally narrowed by a title search."""
    sort = request.args.get("sort", "updated_at")
    direction = request.args.get("direction", "desc")
    title = request.args.get("title", "")
    service = _service()
    if title:
        found = service.find_by_title_containing(title, sort, direction)
    else:
        found = service.find_all_sorted_by(sort, direction)
    return render_template(
        "fragments/product_table.html",
        products=found,
        sort=sort,
        direction=direction,
        title=title,
    )


@products.route("/products", methods=["GET"])
def all_products() -> str:
    return render_template("fragments/products.html", products=_service().get_all_products())


@products.route("/products/refresh", methods=["GET"])
def refresh_products() -> str:
    return render_template("fragments/product_table.html", products=_service().get_all_products())


@products.route("/product", methods=["POST"])
def add_product() -> str:
    """Save a new product and return the updated table."""
    service = _service()
    service.save_product(product_from_form(request.form))
    return render_template("fragments/product_table.html", products=service.get_all_products())


@products.route("/product/search/table", methods=["GET"])
def search_products() -> str:
    title = request.args.get("title", "")
    return render_template(
        "fragments/product_table.html",
        products=_service().find_by_title_containing(title),
        title=title,
    )


@products.route("/products/search", methods=["GET"])
def search_page() -> str:
    return render_template("fragments/search_product.html", products=_service().get_all_products())


@products.route("/products/edit/<int:product_id>", methods=["GET"])
def edit_product(product_id: int) -> str:
    return render_template("fragments/edit_product.html", product=_service().get_product_by_id(product_id))


@products.route("/products/<int:product_id>", methods=["PUT"])
def update_product(product_id: int) -> str:
    """Update a product and its variants, then return the product list."""
    service = _service()
    service.update_product(product_from_form(request.form), product_id)
    return render_template("fragments/products.html", products=service.get_all_products())


@products.route("/products/<int:product_id>", methods=["DELETE"])
def delete_product(product_id: int) -> Response:
    _service().delete_by_id(product_id)
    return Response(status=200)
