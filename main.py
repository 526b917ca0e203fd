from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.domains.transactions.routes import router as transaction_router
from app.domains.seed.routes import router as seed_router
from app.config.mongodb import MongoDB
from app.config.setting import settings
import logging
from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s"
)

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.parsed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


@app.on_event("startup")
async def startup():
    mongodb = MongoDB(settings.mongo_uri, settings.mongo_db_name, settings.mongo_collection)
    try:
        await mongodb.init_db()
        count = await mongodb.transactions.count_documents({})
        logger.info(f"MongoDB connected. Found {count} documents in '{settings.mongo_collection}' collection.")
    except Exception as e:
        logger.error(f"MongoDB connection failed: {str(e)}")
        mongodb.close()
        raise
    app.state.mongodb = mongodb


@app.on_event("shutdown")
def shutdown_db():
    mongodb = getattr(app.state, "mongodb", None)
    if mongodb is not None:
        mongodb.close()


@app.get("/")
def read_root():
    return {"message": f"{settings.app_name} is running"}


app.include_router(transaction_router, prefix="/api", tags=["Transaction"])
app.include_router(seed_router, prefix="/api", tags=["Seed"])
