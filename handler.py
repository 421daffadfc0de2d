"""
AWS Lambda handler — Mangum wrapper for the apilint FastAPI app.
"""

from mangum import Mangum

from apilint.main import app

handler = Mangum(app, lifespan="off")
