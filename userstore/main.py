import logging

from fastapi import FastAPI

from userstore.core.settings import settings
from userstore.routers.users import router as users_router
from userstore.startup import register_error_handlers, register_startup

logging.basicConfig(level=settings.log_level)

app = FastAPI(title=settings.app_name, debug=settings.debug)

register_startup(app)
register_error_handlers(app)

app.include_router(users_router, tags=["users"])


@app.get("/health")
def health_check():
    return {"status": "ok"}
