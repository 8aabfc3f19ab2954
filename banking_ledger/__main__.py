"""Run the API server: ``python -m banking_ledger``."""

import uvicorn

from banking_ledger.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "banking_ledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
