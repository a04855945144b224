"""
Lambda handler for the detail view of one calendar day.
"""
from typing import Any, Dict, List, Optional
from datetime import date
import json

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import BaseModel, Field, ValidationError

from lunarium.models.activity import DayDetails
from lunarium.services.activities import activities_from_provider, get_day_details
from lunarium.services.exceptions import CycleError
from lunarium.services.settings import CycleSettingsStore
from lunarium.utils.logging import logger

tracer = Tracer()


class DayRequest(BaseModel):
    """Day detail request model."""
    user_id: str
    day: Optional[date] = None
    today: Optional[date] = None
    activities: List[Dict[str, Any]] = Field(default_factory=list)
    calendar_colors: Dict[str, str] = Field(default_factory=dict)


@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle day detail requests.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response
    """
    try:
        request = DayRequest(**json.loads(event['body']))
        response = describe_day(request)

        return {
            'statusCode': 200,
            'body': response.model_dump_json()
        }

    except (json.JSONDecodeError, ValidationError, CycleError) as e:
        logger.warning('Invalid day request', extra={'error': str(e)})
        return {
            'statusCode': 400,
            'body': json.dumps({'error': str(e)})
        }
    except Exception as e:
        logger.exception('Failed to describe day')
        return {
            'statusCode': 500,
            'body': json.dumps({'error': str(e)})
        }


def describe_day(request: DayRequest) -> DayDetails:
    """
    Load the user's settings and describe the requested day.

    Args:
        request: Validated request

    Returns:
        DayDetails for the day, today when no day is given
    """
    today = request.today or date.today()
    config, history = CycleSettingsStore().load(request.user_id, today)
    activities = activities_from_provider(request.activities, request.calendar_colors)

    return get_day_details(request.day or today, config, history, activities)
