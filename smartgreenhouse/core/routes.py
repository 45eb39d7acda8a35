"""HTTP routes: the messaging webhook and a health probe"""

import logging
from datetime import datetime

from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse

router = APIRouter()
logger = logging.getLogger(__name__)

BAD_REQUEST_TEXT = "Bad Request: Missing message body or sender info."


@router.post("/webhook")
async def message_webhook(request: Request) -> Response:
    """Handle one inbound message (form fields ``Body`` and ``From``)"""
    server = request.app.state.server
    try:
        form = await request.form()
        body = form.get("Body")
        sender = form.get("From")
        body = body.strip() if isinstance(body, str) else ""
        sender = sender.strip() if isinstance(sender, str) else ""
        
        if not body or not sender:
            logger.error(f"Invalid message data: {dict(form)}")
            return PlainTextResponse(BAD_REQUEST_TEXT, status_code=400)
        
        await server.handle_message(sender, body)
        return PlainTextResponse("Message sent", status_code=200)
    
    except Exception:
        logger.exception("❌ Error while processing webhook")
        return PlainTextResponse("Internal Server Error", status_code=500)


@router.get("/health")
async def health(request: Request) -> dict:
    server = request.app.state.server
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "service": "smartgreenhouse",
        "scheduler_running": server.scheduler_running,
        "pending_shutoffs": len(server.schedules.shutoffs.pending),
    }
