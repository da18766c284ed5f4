import logging

from fastapi import FastAPI

from advisor.api.v1.picker import router as picker_router
from advisor.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("session_id", "product_id", "category", "request_tag", "turn_id", "status", "count", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Product Routine Advisor", version="1.0.0")

app.include_router(picker_router, prefix="/api/v1", tags=["picker"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
