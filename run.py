#!/usr/bin/env python3
"""Run script for cadastro-usuarios."""

import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "cadastro_usuarios.api.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        reload=True
    )
