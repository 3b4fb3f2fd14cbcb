"""
Conflict splitting.

A group's conflict score sums, over every topping any member has an opinion
on, min(members who like it, members who dislike it). A group of two or more
is split into a half-and-half pizza when the score reaches
ceil(group size / 2).
"""

import logging
import math
from itertools import combinations

from .grouping import compatibility_score

logger = logging.getLogger(__name__)


def conflict_score(members):
    toppings = set()
    for member in members:
        toppings |= member.liked_toppings | member.disliked_toppings
    score = 0
    for topping in toppings:
        likes = sum(1 for m in members if topping in m.liked_toppings)
        dislikes = sum(1 for m in members if topping in m.disliked_toppings)
        score += min(likes, dislikes)
    return score


def should_split(members):
    if len(members) < 2:
        return False
    return conflict_score(members) >= math.ceil(len(members) / 2)


def bisect(members):
    """
    Split `members` into (left, right) halves.

    The pair with the lowest compatibility score seeds the two halves (the
    earlier of the two seeds the left half). Every other member joins the half
    whose seed it is more compatible with; ties go to the smaller half, then
    to the left.
    """
    left_seed, right_seed = min(
        combinations(range(len(members)), 2),
        key=lambda pair: compatibility_score(members[pair[0]], members[pair[1]]),
    )
    left = [members[left_seed]]
    right = [members[right_seed]]
    for index, member in enumerate(members):
        if index in (left_seed, right_seed):
            continue
        to_left = compatibility_score(member, left[0])
        to_right = compatibility_score(member, right[0])
        if to_left > to_right or (to_left == to_right and len(left) <= len(right)):
            left.append(member)
        else:
            right.append(member)
    logger.debug("Split %s | %s", [m.name for m in left], [m.name for m in right])
    return tuple(left), tuple(right)
