from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET

from .models import Party
from .planning import recommend_for_party, waves_for_party
from .utils import compute_pizza_scores


def _validation_error_response(error):
    return JsonResponse({'errors': error.messages}, status=400)


@require_GET
def party_recommendations(request, party_id):
    """The recommended pizza and beverage order for a party. Staff also see per-pizza scores."""
    party = get_object_or_404(Party, pk=party_id)
    try:
        result = recommend_for_party(party)
    except ValidationError as e:
        return _validation_error_response(e)

    data = result.as_dict()
    if request.user.is_staff:
        data['scores'] = compute_pizza_scores(result.pizzas)
    return JsonResponse(data)


@require_GET
def party_waves(request, party_id):
    """The recommended order split into delivery waves."""
    party = get_object_or_404(Party, pk=party_id)
    try:
        waves = waves_for_party(party)
    except ValidationError as e:
        return _validation_error_response(e)
    return JsonResponse({'waves': [w.as_dict() for w in waves]})
