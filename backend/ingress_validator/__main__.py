"""Run the admission webhook: python -m ingress_validator"""

import uvicorn

from ingress_validator.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "ingress_validator.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL,
    )


if __name__ == "__main__":
    main()
