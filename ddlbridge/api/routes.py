from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from typing import Dict, Any, Optional

from ddlbridge.config import config  # Global config
from ddlbridge.utils.timing import timed
from ddlbridge.utils.logger import setup_logger
from ..services.sql_conversion import SchemaTranslator, UnsupportedDialect, supported_dialects

api_router = APIRouter(prefix='/api/v1')

# Setup logger for API
logger = setup_logger('api_routes')


def _conversion_setting(key: str, default: Any) -> Any:
    return config.get('conversion', {}).get(key, default)


def _validate_script(payload: Dict[str, Any]) -> Optional[JSONResponse]:
    """Return an error response when the request carries no usable script."""
    if not payload:
        return JSONResponse({'error': 'No JSON data provided'}, status_code=400)

    sql = payload.get('sql')
    if not isinstance(sql, str):
        return JSONResponse({'error': 'Missing required field: sql'}, status_code=400)

    max_bytes = _conversion_setting('max_script_bytes', 1024 * 1024)
    if max_bytes and len(sql.encode('utf-8')) > max_bytes:
        return JSONResponse({'error': f'Script exceeds the {max_bytes} byte limit'}, status_code=413)
    return None


@api_router.get('/')
def root():
    """Root endpoint of the API.

    Returns a simple JSON message indicating the API is running.
    {
        "message": "API is running"
    }
    """
    return JSONResponse({"message": "API is running"})


@api_router.get('/dialects')
def list_dialects():
    """List the accepted target dialect identifiers and the default one."""
    return JSONResponse({
        'dialects': supported_dialects(),
        'default': _conversion_setting('default_target', 'pgsql'),
    })


@api_router.post('/convert')
def convert_sql_endpoint(payload: Dict[str, Any] = Body(...)):
    """Convert the CREATE TABLE statements of ``payload['sql']``.

    Body: ``{"sql": str, "target_dialect": str?}``; the target defaults to
    ``conversion.default_target`` from settings.yaml.
    """
    try:
        error = _validate_script(payload)
        if error is not None:
            return error

        target = payload.get('target_dialect') or _conversion_setting('default_target', 'pgsql')

        # Create a new translator instance for each request
        translator = SchemaTranslator(target)
        result = timed(translator.translate_with_report, payload['sql'])
        logger.info(f"/convert -> {result['target_dialect']}: {result['message']}")
        return JSONResponse(result)

    except UnsupportedDialect as ud:
        return JSONResponse({'error': str(ud), 'supported': supported_dialects()}, status_code=400)
    except Exception as e:
        logger.error(f"An unhandled exception occurred in /convert: {e}", exc_info=True)
        return JSONResponse({'error': 'An internal server error occurred.', 'details': str(e)}, status_code=500)


@api_router.post('/parse')
def parse_sql_endpoint(payload: Dict[str, Any] = Body(...)):
    """Parse ``payload['sql']`` and return the table models without emitting DDL."""
    try:
        error = _validate_script(payload)
        if error is not None:
            return error

        def _parse(script: str) -> Dict[str, Any]:
            tables, skipped = SchemaTranslator().parse_all(script)
            return {
                'status': 'success' if tables else 'empty',
                'tables': [t.to_dict() for t in tables],
                'skipped': [s.to_dict() for s in skipped],
            }

        return JSONResponse(timed(_parse, payload['sql']))

    except Exception as e:
        logger.error(f"An unhandled exception occurred in /parse: {e}", exc_info=True)
        return JSONResponse({'error': 'An internal server error occurred.', 'details': str(e)}, status_code=500)
