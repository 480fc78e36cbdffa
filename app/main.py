from dotenv import load_dotenv


from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.api_v1 import router as api_v1
from app.core.config import settings
from app.core.lifespan import lifespan
from app.core.logging import get_logger
from app.services.errors import InvalidInputError

load_dotenv()  # Load .env variables into os.environ for libraries (LangSmith, etc.)

logger = get_logger(__name__)

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/")
def root():
    return {"message": f"{settings.PROJECT_NAME} is running"}


app.include_router(api_v1)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
