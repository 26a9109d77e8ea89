"""Run the Property Listings API with uvicorn.

    python -m property_listings
"""

import uvicorn

from property_listings.config import settings


def main() -> None:
    uvicorn.run(
        "property_listings.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
