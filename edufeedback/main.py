import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from edufeedback.core import config
from edufeedback.core.errors import FeedbackAppError
from edufeedback.database import SessionLocal, init_db
from edufeedback.routes import admin_routes, auth_routes, feedback_routes
from edufeedback.seed import seed_default_admin

logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title='EduFeedback API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.exception_handler(FeedbackAppError)
async def handle_app_error(request: Request, exc: FeedbackAppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error('%s %s failed: %s', request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={'error': exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = '.'.join(str(part) for part in error.get('loc', ()) if part != 'body')
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get('msg')))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'error': '; '.join(messages) or 'Invalid request'},
    )


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        init_db()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')
        return

    db = SessionLocal()
    try:
        seed_default_admin(db)
    except FeedbackAppError:
        logger.exception('Seeding the default admin failed.')
    finally:
        db.close()


@app.get('/')
def root():
    return {'status': 'Feedback API Running'}


app.include_router(auth_routes.router, prefix='/api')
app.include_router(feedback_routes.router, prefix='/api')
app.include_router(admin_routes.router, prefix='/api/admin')
