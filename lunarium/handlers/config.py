"""
Lambda handler for reading, saving and clearing the cycle configuration.

    GET     ?user_id=...    stored config and history
    POST    body            save config and derive history
    DELETE  ?user_id=...    remove both settings documents
"""
from typing import Dict, List, Optional
from datetime import date
import json

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import BaseModel, Field, ValidationError

from lunarium.models.cycle import CycleConfig, CycleHistoryEntry, RawHistoryEntry
from lunarium.services.cycle import average_cycle_length, effective_cycle_length
from lunarium.services.exceptions import CycleError
from lunarium.services.history import HistoryDraft
from lunarium.services.settings import CycleSettingsStore
from lunarium.utils.logging import logger

tracer = Tracer()


class ConfigRequest(BaseModel):
    """Cycle settings save request model."""
    user_id: str
    cycle_start_date: date
    cycle_length: int
    history: List[RawHistoryEntry] = Field(default_factory=list)


class ConfigResponse(BaseModel):
    """Stored cycle settings."""
    config: CycleConfig
    history: List[CycleHistoryEntry]
    average_length: int
    effective_length: int
    average_with_current: Optional[int] = None


def _respond(response: ConfigResponse) -> Dict:
    return {
        'statusCode': 200,
        'body': response.model_dump_json(by_alias=True)
    }


@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle cycle settings requests.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response
    """
    try:
        method = event.get('httpMethod') or 'POST'

        if method in ('GET', 'DELETE'):
            query_params = event.get('queryStringParameters', {}) or {}
            user_id = query_params.get('user_id')
            if not user_id:
                return {
                    'statusCode': 400,
                    'body': json.dumps({'error': 'user_id is required'})
                }

            if method == 'DELETE':
                CycleSettingsStore().clear(user_id)
                return {'statusCode': 204, 'body': ''}

            today = date.fromisoformat(query_params['today']) if query_params.get('today') else date.today()
            return _respond(read_settings(user_id, today))

        request = ConfigRequest(**json.loads(event['body']))
        return _respond(save_settings(request))

    except (json.JSONDecodeError, ValidationError, CycleError, ValueError) as e:
        logger.warning('Invalid cycle settings', extra={'error': str(e)})
        return {
            'statusCode': 400,
            'body': json.dumps({'error': str(e)})
        }
    except Exception as e:
        logger.exception('Failed to handle cycle settings')
        return {
            'statusCode': 500,
            'body': json.dumps({'error': str(e)})
        }


def read_settings(user_id: str, today: date) -> ConfigResponse:
    """Load the stored configuration and history of a user."""
    store = CycleSettingsStore()
    config = store.load_config(user_id, today)
    history = store.load_history(user_id)

    return ConfigResponse(
        config=config,
        history=history,
        average_length=average_cycle_length(history),
        effective_length=effective_cycle_length(config, history)
    )


def save_settings(request: ConfigRequest) -> ConfigResponse:
    """
    Derive history lengths and persist the new settings.

    Args:
        request: Validated request

    Returns:
        ConfigResponse with what was stored
    """
    config = CycleConfig(
        cycle_start_date=request.cycle_start_date,
        cycle_length=request.cycle_length
    )
    draft = HistoryDraft(request.history)
    config, history = CycleSettingsStore().save(request.user_id, config, draft.entries)

    return ConfigResponse(
        config=config,
        history=history,
        average_length=average_cycle_length(history),
        effective_length=effective_cycle_length(config, history),
        average_with_current=draft.average_with_current(config.cycle_start_date, config.cycle_length)
    )
