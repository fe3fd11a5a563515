from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from core import config, db, errors
from core.logging_config import setup_logging
from diagnostics import router as diagnostics_router
from users import router as users_router


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging()
    # Connecting happens in the background; the app serves probes meanwhile.
    db.start()
    try:
        yield
    finally:
        await db.close()


app = FastAPI(lifespan=lifespan)
errors.register_error_handlers(app)

app.include_router(diagnostics_router.router, tags=["diagnostics"])
app.include_router(users_router.router, tags=["users"])


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=config.server_port())
