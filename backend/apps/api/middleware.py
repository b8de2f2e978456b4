from django.utils.deprecation import MiddlewareMixin
from rest_framework.renderers import JSONRenderer
from apps.api.validation import validate_request_context
from apps.common import get_logger

logger = get_logger(__name__).bind(component='api', layer='middleware')


def _render(response):
    # The view never ran, so DRF content negotiation did not attach a renderer
    response.accepted_renderer = JSONRenderer()
    response.accepted_media_type = 'application/json'
    response.renderer_context = {}
    response.render()
    return response


class RequestValidationMiddleware(MiddlewareMixin):
    """
    Runs the per-view request checks (currently: authentication for cart and
    account endpoints) before the DRF view is dispatched.
    """

    def process_view(self, request, view_func, view_args, view_kwargs):
        view_class = getattr(view_func, 'view_class', None)
        if not view_class:
            return None
        view_name = getattr(view_class, '__name__', str(view_class))
        logger.debug('Validating request context', view=view_name, method=request.method)
        response = validate_request_context(request, view_class, view_kwargs)
        if response is None:
            return None
        logger.info(
            'Request blocked by validation',
            view=view_name,
            method=request.method,
            status=response.status_code,
        )
        return _render(response)
