import uvicorn

from edufeedback.core import config


if __name__ == "__main__":  # pragma: no cover
    uvicorn.run(
        "edufeedback.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.APP_ENV in ["test", "development"],
        log_level=config.LOG_LEVEL.lower(),
    )
