"""
Lambda handler for the cycle wheel view.
"""
from typing import Dict, Optional
from datetime import date
import json

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import BaseModel, Field, ValidationError

from lunarium.models.phase import PhaseInfo
from lunarium.models.wheel import WheelLayout, WheelRadii
from lunarium.services.cycle import effective_cycle_length
from lunarium.services.exceptions import CycleError
from lunarium.services.interaction import WheelInteraction
from lunarium.services.settings import CycleSettingsStore
from lunarium.services.wheel import build_wheel
from lunarium.utils.logging import logger

tracer = Tracer()


class WheelRequest(BaseModel):
    """Wheel view request model."""
    user_id: str
    today: Optional[date] = None
    selected_day: Optional[int] = None
    outer_radius: float = Field(180.0, gt=0)
    inner_radius: float = Field(110.0, ge=0)
    center_x: float = 200.0
    center_y: float = 200.0


class WheelResponse(BaseModel):
    """Wheel view response model."""
    layout: WheelLayout
    paths: Dict[int, str]
    current_day: int
    display_day: int
    display_date: date
    phase: PhaseInfo


@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle wheel layout requests.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response
    """
    try:
        request = WheelRequest(**json.loads(event['body']))
        response = render_wheel(request)

        return {
            'statusCode': 200,
            'body': response.model_dump_json()
        }

    except (json.JSONDecodeError, ValidationError, ValueError, CycleError) as e:
        logger.warning('Invalid wheel request', extra={'error': str(e)})
        return {
            'statusCode': 400,
            'body': json.dumps({'error': str(e)})
        }
    except Exception as e:
        logger.exception('Failed to render wheel')
        return {
            'statusCode': 500,
            'body': json.dumps({'error': str(e)})
        }


def render_wheel(request: WheelRequest) -> WheelResponse:
    """
    Build the wheel for the user's cycle, with an optional selected day.

    Args:
        request: Validated request

    Returns:
        WheelResponse with layout, wedge paths and the displayed day's phase

    Raises:
        ValueError: If the selected day is not on the wheel
    """
    today = request.today or date.today()
    config, history = CycleSettingsStore().load(request.user_id, today)
    cycle_length = effective_cycle_length(config, history)

    interaction = WheelInteraction(config, today, cycle_length)
    if request.selected_day is not None:
        interaction.select(request.selected_day)

    radii = WheelRadii(
        outer=request.outer_radius,
        inner=request.inner_radius,
        center_x=request.center_x,
        center_y=request.center_y
    )
    layout = build_wheel(cycle_length, interaction.current_day, radii)

    return WheelResponse(
        layout=layout,
        paths={segment.day: segment.path() for segment in layout.segments},
        current_day=interaction.current_day,
        display_day=interaction.display_day,
        display_date=interaction.display_date,
        phase=interaction.display_phase()
    )
