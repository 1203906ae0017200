"""
API entrypoint

Run:
    python -m openbill
"""
import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "openbill.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        reload=False,
    )
