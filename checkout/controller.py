"""
Checkout flow for a single product dialog.

    IDLE --submit--> SUBMITTING --charge created--> AWAITING_PAYMENT --paid--> CONFIRMED
                         |                              |
                         +--charge failed--> IDLE       +--poll timeout--> ERROR

ERROR is transient: the next user action puts the flow back to IDLE.
close() is valid from every state and discards the order and the charge.
"""
import threading
import time
from enum import Enum

from audit.logger import logger
from checkout.polling import ThreadingPollScheduler
from exceptions.payment_exceptions import (
    GENERIC_PAYMENT_ERROR,
    KillswitchBlocked,
    PaymentError,
    ValidationError,
)
from models.charges import ChargeStatus
from models.orders import Order
from services.documents import format_document, is_valid_document, mask_document, strip_non_digits
from services.receipt import generate_receipt, render_receipt_text

DEFAULT_POLL_INTERVAL_SECONDS = 5.0
DEFAULT_POLL_TIMEOUT_SECONDS = 600.0

MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 100

FORM_ERROR_TITLE = "Erro no formulário"
PAYMENT_ERROR_TITLE = "Erro no pagamento"
PAYMENT_CONFIRMED_TITLE = "Pagamento confirmado!"
POLL_TIMEOUT_MESSAGE = "Tempo para pagamento expirado. Gere um novo PIX."


class CheckoutState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    AWAITING_PAYMENT = "awaiting_payment"
    CONFIRMED = "confirmed"
    ERROR = "error"


def log_notifier(title, description, variant="default"):
    logger.info(f"Checkout notification | variant={variant} | title={title} | description={description}")


class CheckoutController:
    def __init__(
        self,
        proxy,
        killswitch,
        *,
        scheduler=None,
        notifier=log_notifier,
        poll_interval_seconds=DEFAULT_POLL_INTERVAL_SECONDS,
        poll_timeout_seconds=DEFAULT_POLL_TIMEOUT_SECONDS,
        clock=time.monotonic,
        receipt_factory=generate_receipt,
    ):
        self.proxy = proxy
        self.killswitch = killswitch
        self.scheduler = scheduler or ThreadingPollScheduler()
        self.notify = notifier
        self.poll_interval_seconds = poll_interval_seconds
        self.poll_timeout_seconds = poll_timeout_seconds
        self._clock = clock
        self._receipt_factory = receipt_factory

        self.state = CheckoutState.IDLE
        self.order = None
        self.charge = None
        self.receipt = None
        self.error_message = None

        self._lock = threading.RLock()
        self._poll_handle = None
        self._poll_started_at = None
        self._poll_in_flight = False
        # Bumped whenever the current charge is discarded; results computed
        # for an older generation are dropped.
        self._generation = 0

    # ---- user actions -------------------------------------------------

    def open(self, product) -> Order:
        with self._lock:
            self._discard()
            self.order = Order(product=product)
            return self.order

    def close(self) -> None:
        with self._lock:
            self._discard()
            self.order = None

    def select_quantity(self, quantity: int) -> None:
        with self._lock:
            self._leave_error()
            self._require_order().set_quantity(quantity)

    def update_document(self, raw: str) -> str:
        """Re-renders the typed document with punctuation and keeps it on the order."""
        formatted = format_document(raw)
        with self._lock:
            self._leave_error()
            self._require_order().document_number = formatted
        return formatted

    def submit(self, name: str, document=None, *, email="", phone="") -> CheckoutState:
        with self._lock:
            self._leave_error()

            if self.state != CheckoutState.IDLE or self.order is None:
                return self.state

            try:
                self.killswitch.ensure_enabled()
            except KillswitchBlocked as e:
                # Same title and message as an ordinary provider failure
                logger.info("Checkout blocked by payment killswitch")
                self.notify(PAYMENT_ERROR_TITLE, str(e), "destructive")
                return self.state

            if document is not None:
                self.order.document_number = format_document(document)

            try:
                self._validate_form(name, self.order.document_number)
            except ValidationError as e:
                self.notify(FORM_ERROR_TITLE, str(e), "destructive")
                return self.state

            self.order.customer_name = name.strip()
            self.state = CheckoutState.SUBMITTING
            generation = self._generation
            amount = self.order.total
            customer = {
                "name": self.order.customer_name,
                "cpf": strip_non_digits(self.order.document_number),
                "email": email or "",
                "phone": phone or "",
            }

            logger.info(
                f"Submitting PIX checkout | product={self.order.product.id} | quantity={self.order.quantity} | amount={amount} | document={mask_document(customer['cpf'])}"
            )

        try:
            charge = self.proxy.create_charge(amount, customer)
        except PaymentError as e:
            with self._lock:
                if generation == self._generation and self.state == CheckoutState.SUBMITTING:
                    self.state = CheckoutState.IDLE
                    self.notify(PAYMENT_ERROR_TITLE, str(e) or GENERIC_PAYMENT_ERROR, "destructive")
                return self.state

        with self._lock:
            if generation != self._generation or self.state != CheckoutState.SUBMITTING:
                logger.info(f"Discarding charge created after checkout moved on | identifier={charge.identifier}")
                return self.state

            self.charge = charge
            self.state = CheckoutState.AWAITING_PAYMENT
            self._start_polling()

            logger.info(f"Awaiting PIX payment | identifier={charge.identifier} | amount={charge.amount}")
            return self.state

    def download_receipt(self) -> str:
        with self._lock:
            if self.state != CheckoutState.CONFIRMED or self.receipt is None:
                raise ValidationError("Comprovante disponível apenas após a confirmação do pagamento")
            return render_receipt_text(self.receipt)

    # ---- polling ------------------------------------------------------

    def _start_polling(self):
        if self._poll_handle is not None:
            self._poll_handle.cancel()
        self._poll_started_at = self._clock()
        self._poll_in_flight = False
        self._poll_handle = self.scheduler.start_polling(self.poll_interval_seconds, self.poll_once)

    def _stop_polling(self):
        if self._poll_handle is not None:
            self._poll_handle.cancel()
        self._poll_handle = None
        self._poll_in_flight = False

    def poll_once(self) -> None:
        """One status tick. Invoked by the scheduler."""
        with self._lock:
            if self.state != CheckoutState.AWAITING_PAYMENT or self._poll_in_flight:
                return

            if self._clock() - self._poll_started_at >= self.poll_timeout_seconds:
                logger.warning(f"PIX polling timed out | identifier={self.charge.identifier}")
                self._stop_polling()
                self.state = CheckoutState.ERROR
                self.error_message = POLL_TIMEOUT_MESSAGE
                self.notify(PAYMENT_ERROR_TITLE, POLL_TIMEOUT_MESSAGE, "destructive")
                return

            self._poll_in_flight = True
            generation = self._generation
            identifier = self.charge.identifier

        status = None
        try:
            status = self.proxy.check_status(identifier)
        except PaymentError as e:
            logger.warning(f"PIX status tick failed | identifier={identifier} | error={e}")
        except Exception:
            logger.exception(f"Unexpected error on PIX status tick | identifier={identifier}")

        with self._lock:
            if generation != self._generation:
                return
            self._poll_in_flight = False

            if self.state != CheckoutState.AWAITING_PAYMENT:
                return

            if status == ChargeStatus.PAID:
                self._confirm()

    def _confirm(self):
        self._stop_polling()
        self.charge.status = ChargeStatus.PAID
        self.receipt = self._receipt_factory(self.order, self.charge)
        self.state = CheckoutState.CONFIRMED

        logger.info(
            f"PIX payment confirmed | identifier={self.charge.identifier} | receipt={self.receipt.receipt_code}"
        )
        self.notify(
            PAYMENT_CONFIRMED_TITLE,
            f"{self.order.quantity} x {self.order.product.title}",
            "default",
        )

    # ---- helpers ------------------------------------------------------

    def _require_order(self) -> Order:
        if self.order is None:
            raise ValidationError("Nenhum produto selecionado")
        return self.order

    def _leave_error(self):
        if self.state == CheckoutState.ERROR:
            self.state = CheckoutState.IDLE
            self.error_message = None
            self.charge = None

    def _discard(self):
        self._stop_polling()
        self._generation += 1
        self.state = CheckoutState.IDLE
        self.charge = None
        self.receipt = None
        self.error_message = None

    @staticmethod
    def _validate_form(name, document):
        name = (name or "").strip()
        if len(name) < MIN_NAME_LENGTH:
            raise ValidationError("Nome deve ter pelo menos 3 caracteres")
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError("Nome deve ter no máximo 100 caracteres")
        if not is_valid_document(document):
            raise ValidationError("CPF/CNPJ inválido")
