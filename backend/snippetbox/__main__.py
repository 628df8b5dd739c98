"""
Snippetbox — Server Entry Point
================================

Usage::

    python -m snippetbox

Host, port and TLS come from settings (BACKEND_HOST, BACKEND_PORT,
TLS_CERT_FILE, TLS_KEY_FILE). Logging is configured by the app's lifespan.
"""

import uvicorn

from snippetbox.config import settings


def main() -> None:
    options = {}
    if settings.tls_enabled:
        options["ssl_certfile"] = settings.tls_cert_file
        options["ssl_keyfile"] = settings.tls_key_file

    uvicorn.run(
        "snippetbox.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
        access_log=False,
        **options,
    )


if __name__ == "__main__":
    main()
