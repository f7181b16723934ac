"""Run the API with uvicorn: python -m job_platform"""
import uvicorn

from job_platform.core.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run("job_platform.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
