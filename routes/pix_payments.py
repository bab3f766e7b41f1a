from flask import Blueprint, current_app, jsonify, request

from audit.logger import logger
from extensions import limiter
from exceptions.payment_exceptions import (
    GENERIC_PAYMENT_ERROR,
    GENERIC_STATUS_ERROR,
    ConfigurationError,
    GatewayRejected,
    IncompleteRequest,
    NetworkUnknown,
    PaymentError,
    ValidationError,
)
from gateways.factory import get_gateway
from gateways.qr import render_qr_data_uri
from services.documents import mask_document
from services.formatting import to_decimal

# Server-side proxy between the storefront and the PIX provider.
# The provider credential never leaves this process.
pix_payments_bp = Blueprint("pix_payments", __name__)

CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"


@pix_payments_bp.after_request
def _add_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = current_app.config.get("CORS_ALLOW_ORIGIN", "*")
    response.headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
    response.headers["Access-Control-Allow-Methods"] = "POST, OPTIONS"
    return response


def _error(message, status_code):
    return jsonify({"success": False, "message": message}), status_code


def _status_unknown(identifier, message):
    return jsonify({
        "success": False,
        "message": message,
        "data": {"identifier": identifier, "status": "unknown"},
    }), 200


@pix_payments_bp.route("/functions/create-pix-payment", methods=["POST", "OPTIONS"])
@limiter.limit("30 per minute", methods=["POST"])
def create_pix_payment():
    """
    PIX payment proxy.

    - OPTIONS: CORS pre-flight
    - {"checkStatus": true, "identifier": ...}: status check, always HTTP 200
    - {"amount": ..., "customer": {...}}: creates the charge at the provider
    """
    if request.method == "OPTIONS":
        return "", 200

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    if data.get("checkStatus"):
        return _check_status(data.get("identifier"))

    return _create_charge(data)


def _parse_charge_request(data):
    raw_amount = data.get("amount")
    customer = data.get("customer")

    if raw_amount is None or not isinstance(customer, dict):
        raise IncompleteRequest("Valor e dados do cliente são obrigatórios")

    if not customer.get("name") or not customer.get("cpf"):
        raise IncompleteRequest("Nome e CPF/CNPJ do cliente são obrigatórios")

    amount = to_decimal(raw_amount)
    if amount is None or not amount.is_finite() or amount <= 0:
        raise ValidationError("Valor inválido")

    return amount, customer


def _create_charge(data):
    try:
        amount, customer = _parse_charge_request(data)
    except ValidationError as e:
        return _error(str(e), 400)

    try:
        gateway = get_gateway(current_app.config)

        logger.info(
            f"Creating PIX payment | provider={gateway.name} | amount={amount} | document={mask_document(customer['cpf'])}"
        )

        charge = gateway.create_charge(amount, customer)

    except ConfigurationError as e:
        logger.error(f"Payment gateway misconfigured | error={e}")
        return _error(str(e), 500)

    except GatewayRejected as e:
        logger.warning(f"PIX payment rejected by provider | amount={amount} | message={e}")
        return _error(str(e), 400)

    except NetworkUnknown:
        return _error(GENERIC_PAYMENT_ERROR, 502)

    except Exception:
        # Fallback: full stack trace in the log, generic message to the client.
        logger.exception("Unhandled error creating PIX payment")
        return _error(GENERIC_PAYMENT_ERROR, 500)

    response = charge.to_wire()
    if "qrCodeImage" not in response and charge.qr_code_payload:
        response["qrCodeImage"] = render_qr_data_uri(charge.qr_code_payload)

    logger.info(
        f"PIX payment created | identifier={charge.identifier} | status={charge.status.value} | amount={charge.amount}"
    )

    return jsonify({"success": True, "data": response}), 200


def _check_status(identifier):
    # Polling clients treat any failure here as an inconclusive tick, so the
    # answer is always a structured 200.
    if not identifier:
        return _status_unknown(identifier, "Identificador não informado")

    identifier = str(identifier)

    try:
        gateway = get_gateway(current_app.config)
        status = gateway.check_status(identifier)

    except ConfigurationError as e:
        logger.error(f"Payment gateway misconfigured | error={e}")
        return _status_unknown(identifier, str(e))

    except PaymentError as e:
        logger.warning(f"PIX status check inconclusive | identifier={identifier} | error={e}")
        return _status_unknown(identifier, GENERIC_STATUS_ERROR)

    except Exception:
        logger.exception(f"Unhandled error checking PIX status | identifier={identifier}")
        return _status_unknown(identifier, GENERIC_STATUS_ERROR)

    logger.info(f"PIX status checked | identifier={identifier} | status={status.value}")

    return jsonify({
        "success": True,
        "data": {"status": status.value, "identifier": identifier},
    }), 200
