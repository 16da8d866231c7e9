from fastapi import FastAPI
from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from screener.api.routes import router, WEBHOOK_PATH
from screener.api.admin_routes import router as admin_router
from screener.settings import settings
from screener.observability.logging import log

app = FastAPI(title="Teacher Screening Bot")

origins = [x.strip() for x in settings.CORS_ORIGINS.split(",") if x.strip()]
if origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

app.include_router(router)
app.include_router(admin_router)


@app.get("/")
def root():
    return {
        "status": "ok",
        "message": f"Screening bot is running. Telegram updates go to POST {WEBHOOK_PATH}.",
    }


@app.get("/health")
def health():
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Telegram redelivers updates on any non-200, which would replay button
# presses. Anything that escapes a handler on the webhook path is logged and
# acknowledged.
# ---------------------------------------------------------------------------
@app.exception_handler(Exception)
async def universal_exception_handler(request: Request, exc: Exception):
    log(
        event="unhandled_exception",
        path=request.url.path,
        errorType=type(exc).__name__,
        error=str(exc)[:500],
    )
    if request.url.path == WEBHOOK_PATH:
        return JSONResponse(status_code=200, content={"ok": True})
    return JSONResponse(status_code=500, content={"status": "error"})


log(
    event="boot",
    variant=settings.SCREENING_VARIANT,
    deliveryMode=settings.DELIVERY_MODE,
    webhookSecretSet=bool(settings.TELEGRAM_WEBHOOK_SECRET),
    resultUrlSet=bool(settings.RESULT_WEBHOOK_URL),
)
