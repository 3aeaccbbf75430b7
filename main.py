from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI

from apis.landing_api import router as landing_router
from apis.page_api import router as page_router
from core.infrastructure.lifecycle import lifespan
from core.infrastructure.request_logging_middleware import RequestLoggingMiddleware
from core.metadata import APP_TITLE, VERSION
from exceptions.handlers import setup_exception_handlers


app = FastAPI(title=APP_TITLE, version=VERSION, lifespan=lifespan)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(page_router)
app.include_router(landing_router)


setup_exception_handlers(app)


if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "3000")))
