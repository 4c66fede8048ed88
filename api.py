import logging
from contextlib import asynccontextmanager

import uvicorn
from sqlmodel import SQLModel
from config import ApplicationConfig
from authcore.api.app import create_app
from authcore.depends import engine

logging.basicConfig(
    level=ApplicationConfig.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app):
    # Tables are created if missing; existing schemas are left alone
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield
    await engine.dispose()


app = create_app(ApplicationConfig, lifespan=lifespan)

if __name__ == "__main__":
    uvicorn.run(
        "api:app",
        host=ApplicationConfig.API_HOST,
        port=ApplicationConfig.API_PORT,
        reload=True,
        log_level=ApplicationConfig.LOG_LEVEL.lower(),
    )
