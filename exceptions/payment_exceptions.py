# User-facing messages. The killswitch reuses GENERIC_PAYMENT_ERROR so a
# disabled checkout reads exactly like a failed charge.
GENERIC_PAYMENT_ERROR = "Erro ao criar pagamento PIX"
GENERIC_STATUS_ERROR = "Não foi possível consultar o pagamento"
TOKEN_NOT_CONFIGURED = "Token de pagamento não configurado"


class PaymentError(Exception):
    pass


class ValidationError(PaymentError):
    pass


class IncompleteRequest(ValidationError):
    pass


class ConfigurationError(PaymentError):
    pass


class GatewayRejected(PaymentError):
    pass


class NetworkUnknown(PaymentError):
    pass


class KillswitchBlocked(PaymentError):
    pass
