def _score(guests, toppings):
    topping_ids = {t.id for t in toppings}
    score = 0
    for guest in guests:
        score += len(topping_ids & set(guest.liked_toppings))
        score -= len(topping_ids & set(guest.disliked_toppings))
    return score


def compute_pizza_scores(pizzas):
    """Return a dict mapping pizza id -> integer score based on the assigned guests' preferences."""
    scores = {}
    for pizza in pizzas:
        if pizza.is_half_and_half:
            scores[pizza.id] = (_score(pizza.left_half.guests, pizza.left_half.toppings)
                                + _score(pizza.right_half.guests, pizza.right_half.toppings))
        else:
            scores[pizza.id] = _score(pizza.guests, pizza.toppings)
    return scores
