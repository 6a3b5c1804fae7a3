# ============================================================================
# MODULE CONTEXT - BASE HTTP TRIGGER
# ============================================================================
# STATUS: Core Infrastructure - Shared trigger behaviour
# PURPOSE: Request parsing, JSON responses and error mapping for every API module
# EXPORTS: BaseGeoTrigger
# INTERFACES: Azure Functions HttpRequest/HttpResponse
# DEPENDENCIES: azure.functions, pydantic, util_logger
# PATTERNS: Trigger Pattern (template method)
# ============================================================================

"""
Base HTTP Trigger

Every endpoint trigger subclasses BaseGeoTrigger and implements process(),
which parses the request, calls its service and returns plain JSON data.
handle() is the Azure Functions entry point and maps failures to responses:

    pydantic.ValidationError  -> 400 BadRequest (query parameters or body)
    ValueError                -> 400 BadRequest (malformed JSON, bad values)
    any other Exception       -> 500 InternalServerError

Error bodies are {"code": ..., "description": ...}.

Date: 14 OCT 2026
"""

import azure.functions as func
import json
import time
import uuid
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from util_logger import ComponentType, LoggerFactory

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "BaseGeoTrigger")

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseGeoTrigger:
    """
    Base class for geoservice API triggers.

    Subclasses set `name` for logging, `service_class` for their service and
    implement process(). The service is created on first use so that
    registering routes does not need database settings.
    """

    name = "geo"
    service_class: Optional[type] = None

    def __init__(self, service: Optional[Any] = None):
        self._service = service

    @property
    def service(self) -> Any:
        if self._service is None:
            self._service = self.service_class()
        return self._service

    def process(self, req: func.HttpRequest) -> Any:
        raise NotImplementedError

    def handle(self, req: func.HttpRequest) -> func.HttpResponse:
        """
        Handle an HTTP request.

        Args:
            req: Azure Functions HTTP request

        Returns:
            HttpResponse with JSON result or JSON error
        """
        request_id = str(uuid.uuid4())[:8]
        start_time = time.perf_counter()

        try:
            result = self.process(req)

            duration_ms = (time.perf_counter() - start_time) * 1000
            count = len(result) if isinstance(result, list) else 1
            logger.info(
                f"{self.name}: {count} records in {duration_ms:.1f} ms",
                extra={'custom_dimensions': {
                    'request_id': request_id,
                    'trigger': self.name,
                    'records': count,
                    'duration_ms': round(duration_ms, 2)
                }}
            )
            return self._json_response(result)

        except ValidationError as e:
            logger.warning(f"{self.name}: invalid request [{request_id}]: {e.error_count()} errors")
            return self._error_response(
                message=f"Invalid request: {str(e)}",
                status_code=400
            )
        except ValueError as e:
            logger.warning(f"{self.name}: bad request [{request_id}]: {e}")
            return self._error_response(
                message=str(e),
                status_code=400
            )
        except Exception as e:
            logger.error(f"{self.name}: request failed [{request_id}]: {e}", exc_info=True)
            return self._error_response(
                message=f"Internal server error: {str(e)}",
                status_code=500,
                error_type="InternalServerError"
            )

    # ========================================================================
    # REQUEST PARSING
    # ========================================================================

    def _query(self, req: func.HttpRequest, model: Type[ModelT]) -> ModelT:
        """Validate query string parameters against a model."""
        return model.model_validate(dict(req.params))

    def _route(self, req: func.HttpRequest, model: Type[ModelT]) -> ModelT:
        """Validate route parameters against a model."""
        return model.model_validate(dict(req.route_params))

    def _body(self, req: func.HttpRequest, model: Type[ModelT]) -> ModelT:
        """
        Validate the JSON body against a model.

        An empty body counts as an empty object.

        Raises:
            ValueError: If the body is not a JSON object
            ValidationError: If the object does not match the model
        """
        data: Dict[str, Any] = {}
        if req.get_body():
            data = req.get_json()
            if not isinstance(data, dict):
                raise ValueError("Request body must be a JSON object")
        return model.model_validate(data)

    # ========================================================================
    # RESPONSES
    # ========================================================================

    def _json_response(
        self,
        data: Any,
        status_code: int = 200,
        content_type: str = "application/json"
    ) -> func.HttpResponse:
        """
        Create JSON HTTP response.

        Args:
            data: Data to serialize (list, dict or Pydantic model)
            status_code: HTTP status code
            content_type: Response content type
        """
        if hasattr(data, 'model_dump'):
            data = data.model_dump(mode='json', exclude_none=True, by_alias=True)

        return func.HttpResponse(
            body=json.dumps(data, indent=2, default=str),
            status_code=status_code,
            mimetype=content_type
        )

    def _error_response(
        self,
        message: str,
        status_code: int = 400,
        error_type: str = "BadRequest"
    ) -> func.HttpResponse:
        """Create error response with {"code", "description"} body."""
        error_body = {
            "code": error_type,
            "description": message
        }
        return func.HttpResponse(
            body=json.dumps(error_body, indent=2),
            status_code=status_code,
            mimetype="application/json"
        )
