from flask import Blueprint, jsonify

from catalog.products import get_product, list_products

catalog_bp = Blueprint("catalog", __name__)


@catalog_bp.route("/products", methods=["GET"])
def products():
    return jsonify([product.to_dict() for product in list_products()])


@catalog_bp.route("/products/<int:product_id>", methods=["GET"])
def product_detail(product_id):
    product = get_product(product_id)
    if not product:
        return jsonify({"error": "Product not found"}), 404
    return jsonify(product.to_dict())
