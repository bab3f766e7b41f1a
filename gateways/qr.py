import base64
import io

import qrcode


def render_qr_data_uri(payload: str) -> str:
    """Renders a PIX copy-paste payload as a PNG data URI."""
    qr = qrcode.QRCode(box_size=10, border=4)
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffered = io.BytesIO()
    img.save(buffered, format="PNG")
    qr_b64 = base64.b64encode(buffered.getvalue()).decode("ascii")
    return f"data:image/png;base64,{qr_b64}"
