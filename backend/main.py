import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.core import config
from backend.core.errors import DomainError, error_to_response
from backend.core.responses import api_response
from backend.database import Base, engine
from backend.models import submission, user  # noqa: F401
from backend.routes import auth_routes, submission_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

app = FastAPI(title='LMS Backend')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


def format_validation_errors(exc: RequestValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = '.'.join(str(part) for part in error.get('loc', ()) if part != 'body')
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get('msg')))
    return '; '.join(problems) or 'Invalid request'


@app.exception_handler(DomainError)
async def handle_domain_error(request: Request, exc: DomainError):
    status_code, message = error_to_response(exc)
    headers = {'WWW-Authenticate': 'Bearer'} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return api_response(status_code, message, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    return api_response(exc.status_code, str(exc.detail), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    return api_response(status.HTTP_400_BAD_REQUEST, format_validation_errors(exc))


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError):
    logger.error('Database error while handling %s %s', request.method, request.url.path, exc_info=exc)
    status_code, message = error_to_response(exc)
    return api_response(status_code, message)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error('Unhandled error while handling %s %s', request.method, request.url.path, exc_info=exc)
    status_code, message = error_to_response(exc)
    return api_response(status_code, message)


@app.get('/')
def root():
    return api_response(status.HTTP_200_OK, 'LMS API Running')


app.include_router(auth_routes.router, prefix='/auth')
app.include_router(submission_routes.router, prefix='/submissions')
