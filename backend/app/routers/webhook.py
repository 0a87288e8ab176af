# app/routers/webhook.py
import logging
from xml.sax.saxutils import escape

from fastapi import APIRouter, Depends, Form, Response

from app.deps.services import get_ingestion
from app.errors import UnauthorizedSubmitterError
from app.services.ingestion import IngestionService, confirmation_message

log = logging.getLogger(__name__)

router = APIRouter(prefix="/webhook", tags=["webhook"])

def twiml(message: str) -> Response:
    body = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f"<Response>\n  <Message>{escape(message)}</Message>\n</Response>"
    )
    return Response(content=body, media_type="text/xml")

@router.post("/sms")
def receive_sms(
    Body: str | None = Form(None),
    From: str | None = Form(None),
    ingestion: IngestionService = Depends(get_ingestion),
):
    """Twilio posts form-encoded `Body`/`From`; always answers with TwiML."""
    if not Body or not Body.strip() or not From:
        log.warning("SMS webhook called without Body or From")
        return twiml("Invalid request")

    try:
        result = ingestion.submit(Body, From)
    except UnauthorizedSubmitterError:
        return twiml("Not authorized")
    except Exception:
        log.exception("error processing SMS from %s", From)
        return twiml("Error processing workout. Please try again.")

    return twiml(confirmation_message(result.exercise_count))
