#!/usr/bin/env python
"""
Entry point for running the TicketDesk API server
"""

import uvicorn

from ticketdesk_api.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "ticketdesk_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        reload_dirs=["./src"],
    )
