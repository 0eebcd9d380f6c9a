import uvicorn
from config import ApplicationConfig
from fluxinvoice.api.app import create_app

app = create_app(ApplicationConfig)


def main():
    """Serve the invoice API; reload and workers come from env.yaml"""
    uvicorn.run(
        "api:app",
        host=ApplicationConfig.API_HOST,
        port=ApplicationConfig.API_PORT,
        reload=ApplicationConfig.API_RELOAD,
        workers=None if ApplicationConfig.API_RELOAD else ApplicationConfig.API_WORKERS,
        log_level=ApplicationConfig.LOG_LEVEL.lower(),
        access_log=ApplicationConfig.LOG_LEVEL.upper() == "DEBUG",
    )


if __name__ == "__main__":
    main()
