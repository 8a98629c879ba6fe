import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog_api.db.base import init_db
from blog_api.routers import admin_posts, public, rss, webhook
from blog_api.security import require_admin_token, require_webhook_secret
from blog_api.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Blog API", description="Posts, admin edits, n8n webhook and RSS")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Blog API started")
    logger.info(f"Admin token: {'set' if settings.ADMIN_BEARER_TOKEN else 'not set'}")
    logger.info(
        f"n8n webhook secret: {'set' if settings.N8N_WEBHOOK_SECRET else 'not set'}"
    )
    yield
    logger.info("Blog API stopped")


app.router.lifespan_context = lifespan

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FE_ORIGIN,
        "http://localhost:3000",
        "http://localhost:5500",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5500",
    ],
    allow_origin_regex=r"^http://(localhost|127\.0\.0\.1):\d+$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Validation error", "detail": jsonable_encoder(exc.errors())},
    )


app.include_router(public.router)
app.include_router(rss.router)
app.include_router(admin_posts.router, dependencies=[Depends(require_admin_token)])
app.include_router(webhook.router, dependencies=[Depends(require_webhook_secret)])


@app.get("/")
async def root():
    return {
        "message": "Blog API is running",
        "endpoints": {
            "public": {
                "posts": "/api/posts",
                "post": "/api/posts/{slug}",
                "health": "/api/health",
                "rss": "/api/rss",
            },
            "admin": {
                "posts": "/api/admin/posts",
                "post": "/api/admin/posts/{id}",
            },
            "webhook": {"n8n": "/api/webhook/n8n"},
        },
    }
