"""AWS Lambda handler for API Gateway requests.

API Gateway (REST and HTTP API) events are served by the FastAPI application
through the Mangum ASGI adapter. Any other event shape is rejected.
"""

import logging
import os
from typing import Any

from mangum import Mangum

from lambda_dependencies import get_fastapi_app, initialize_lambda_environment

# Cold start initialization, skipped in test mode
if os.getenv("ENVIRONMENT") != "test":
    initialize_lambda_environment()

logger = logging.getLogger(__name__)

if os.getenv("ENVIRONMENT") != "test":
    app = get_fastapi_app()
    mangum_handler = Mangum(app, lifespan="off")
else:
    app = None  # type: ignore
    mangum_handler = None  # type: ignore


def is_api_gateway_event(event: dict[str, Any]) -> bool:
    """Determine if the event is an API Gateway request.

    Args:
        event: The Lambda event payload

    Returns:
        True for API Gateway REST (v1) and HTTP API (v2) payloads
    """
    request_context = event.get("requestContext")
    if not isinstance(request_context, dict):
        return False

    return "http" in request_context or "httpMethod" in event


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda entry point serving the availability API.

    Args:
        event: The Lambda event payload
        context: The Lambda context object

    Returns:
        Response dict with statusCode and body
    """
    logger.info(f"Received Lambda invocation, request_id: {context.aws_request_id}")

    if not is_api_gateway_event(event):
        logger.warning(f"Unsupported event received with keys: {sorted(event.keys())}")
        return {
            "statusCode": 400,
            "body": "Unsupported event type",
        }

    try:
        result: dict[str, Any] = mangum_handler(event, context)
        return result

    except Exception as e:
        logger.exception(f"Unhandled error in Lambda handler: {e}")
        return {
            "statusCode": 500,
            "body": f"Internal server error: {str(e)}",
        }
