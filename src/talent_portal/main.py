import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from src.talent_portal.api.v1.routes_auth import router as auth_router_v1
from src.talent_portal.api.v1.routes_candidate_portal import router as candidate_portal_router_v1
from src.talent_portal.api.v1.routes_candidates import router as candidates_router_v1
from src.talent_portal.api.v1.routes_client import router as client_router_v1
from src.talent_portal.api.v1.routes_clinics import router as clinics_router_v1
from src.talent_portal.api.v1.routes_files import router as files_router_v1
from src.talent_portal.api.v1.routes_journeys import router as journeys_router_v1
from src.talent_portal.api.v1.routes_owner import router as owner_router_v1
from src.talent_portal.api.v1.routes_system import router as system_router_v1
from src.talent_portal.config import settings
from src.talent_portal.errors import PortalError
from src.talent_portal.infra.db.bootstrap import get_store, init_sql_store
from src.talent_portal.infra.db.seed import seed_demo_data

logger = logging.getLogger(__name__)

app = FastAPI(title="Zovea Talent Portal API")


@app.on_event("startup")
async def on_startup() -> None:
    """Application startup hook.

    Configures logging, switches to the SQL store when USE_SQL_REPOS and
    DATABASE_URL are set (otherwise the in-memory store stays active), and
    seeds demo data when SEED_DEMO_DATA is enabled.
    """

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    init_sql_store()
    if settings.seed_demo_data:
        seed_demo_data(get_store())


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    # The public payload never says which rule or record caused the error;
    # the log line does.
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    values = exc.body if isinstance(exc.body, dict) else {}
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "validation_error",
                "message": "Validation failed.",
                "fields": jsonable_encoder(exc.errors()),
                "values": jsonable_encoder(values),
            }
        },
    )


# Session cookie carrying the logged-in user id.
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    session_cookie=settings.session_cookie,
    same_site="lax",
)

# Credentials are allowed so a separately hosted frontend can send the session
# cookie; restrict the origins through CORS_ALLOW_ORIGINS.
allow_origins = [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()] or ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(system_router_v1)
app.include_router(auth_router_v1)
app.include_router(files_router_v1)
app.include_router(owner_router_v1)
app.include_router(clinics_router_v1)
app.include_router(candidates_router_v1)
app.include_router(journeys_router_v1)
app.include_router(client_router_v1)
app.include_router(candidate_portal_router_v1)
