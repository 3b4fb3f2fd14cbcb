from collections import Counter


def select_toppings(members, exclusions, catalog, limit=3):
    """
    Pick up to `limit` toppings for a group (or one half of a pizza).

    A topping is eligible when no member dislikes it and it is not in
    `exclusions`. Eligible toppings are ranked by how many members like them,
    ties broken by name. An empty result means a plain pizza.
    """
    vetoed = set(exclusions)
    for member in members:
        vetoed |= member.disliked_toppings

    likes = Counter(
        topping for member in members for topping in member.liked_toppings
        if topping not in vetoed
    )
    ranked = sorted(likes, key=lambda t: (-likes[t], catalog.topping(t).name))
    return tuple(catalog.topping(t) for t in ranked[:limit])
