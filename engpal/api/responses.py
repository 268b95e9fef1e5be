"""
Shared error payloads
"""
from fastapi.responses import JSONResponse

SERVICE_UNAVAILABLE_MESSAGE = (
    "## CẢNH BÁO\n"
    "EngPal đang bận đi pha cà phê nên tạm thời vắng mặt. "
    "Bạn vui lòng ngồi chơi 3 phút rồi gửi lại cho EngPal nhận xét nha.\n"
    "Cảm ơn bạn đã kiên nhẫn!"
)


def service_unavailable_response() -> JSONResponse:
    """Fixed apology returned whenever generation fails, whatever the cause"""
    return JSONResponse(
        status_code=503,
        content={
            "error": "service_unavailable",
            "message": SERVICE_UNAVAILABLE_MESSAGE,
        }
    )
