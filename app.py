"""Run the ddlbridge conversion API with Uvicorn.

Host, port and auto-reload come from the ``api`` section of
``ddlbridge/settings.yaml``. During development the same app can be served
with ``uvicorn ddlbridge:app --reload --port 5001``.
"""

import uvicorn

from ddlbridge import config


def main() -> None:
    api_cfg = config.get('api', {})
    uvicorn.run(
        "ddlbridge:app",
        host=api_cfg.get('host', "127.0.0.1"),
        port=api_cfg.get('port', 5001),
        reload=api_cfg.get('debug', False),
    )


if __name__ == "__main__":
    main()
