"""AWS Lambda entry point for the YUVI Paste API.

Wraps the FastAPI application with Mangum so that API Gateway events
are translated to ASGI requests.
"""

from mangum import Mangum

from yuvi_paste.main import app

# api_gateway_base_path strips the stage name from paths
handler = Mangum(app, lifespan="off", api_gateway_base_path="/v1")


def lambda_handler(event: dict, context: object) -> dict:
    """
    AWS Lambda function handler.

    Args:
        event: API Gateway event containing request details
        context: Lambda context object with runtime information

    Returns:
        API Gateway response dict with statusCode, headers, and body
    """
    return handler(event, context)
