import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from innovaport.config import settings
from innovaport.core.errors import global_exception_handler, validation_exception_handler
from innovaport.core.rate_limit import limiter
from innovaport.modules.auth import routes as auth_routes
from innovaport.modules.profiles import routes as profiles_routes
from innovaport.modules.projects import routes as projects_routes
from innovaport.modules.quotes import routes as quotes_routes
from innovaport.modules.auto_responses import routes as auto_responses_routes
from innovaport.modules.testimonials import routes as testimonials_routes
from innovaport.modules.platform_testimonials import routes as platform_testimonials_routes
from innovaport.modules.billing import routes as billing_routes
from innovaport.modules.promo_codes import routes as promo_codes_routes
from innovaport.modules.legal_pages import routes as legal_pages_routes
from innovaport.modules.site_settings import routes as site_settings_routes
from innovaport.modules.contact import routes as contact_routes
from innovaport.modules.admin import routes as admin_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"Referrer-Policy", b"strict-origin-when-cross-origin"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Public and dashboard API
app.include_router(auth_routes.router, prefix="/api")
app.include_router(profiles_routes.router, prefix="/api")
app.include_router(projects_routes.router, prefix="/api")
app.include_router(quotes_routes.router, prefix="/api")
app.include_router(auto_responses_routes.router, prefix="/api")
app.include_router(testimonials_routes.router, prefix="/api")
app.include_router(platform_testimonials_routes.router, prefix="/api")
app.include_router(billing_routes.router, prefix="/api")
app.include_router(contact_routes.router, prefix="/api")
app.include_router(legal_pages_routes.router, prefix="/api")
app.include_router(site_settings_routes.router, prefix="/api")

# Back office
app.include_router(promo_codes_routes.router, prefix="/api")
app.include_router(admin_routes.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    logger.info(f"Application startup ({settings.environment})")
    if not settings.stripe_secret_key:
        logger.warning("STRIPE_SECRET_KEY is not set; checkout and webhooks are disabled")
    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY is not set; e-mails will not be delivered")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to innovaport-api", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    return {"status": "ready"}
