import uvicorn
from config import ApplicationConfig
from src.api.app import create_app

app = create_app(ApplicationConfig)


def main():
    """Console entry point: serve the API with the configured host, port and log level"""
    uvicorn.run(
        app,
        host=ApplicationConfig.API_HOST,
        port=int(ApplicationConfig.API_PORT),
        log_level=ApplicationConfig.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
