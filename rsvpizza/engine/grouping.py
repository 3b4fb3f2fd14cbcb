"""
Guest grouping.

Guests are first partitioned by their resolved dietary exclusion set, so that
every group shares one dietary profile. Partitions larger than a pizza are
then clustered greedily: seed a group with the first unassigned guest and keep
adding whichever unassigned guest has the highest total compatibility with the
group's current members, until the group is full.

The greedy pass is O(n^2) per partition and is not globally optimal; exact
set partitioning is deliberately not attempted.
"""

import logging
from dataclasses import dataclass

from .catalog import PizzaStyle

logger = logging.getLogger(__name__)

MAX_GUESTS_PER_PIZZA = {
    PizzaStyle.NEAPOLITAN: 2,
    PizzaStyle.NEW_YORK: 5,
    PizzaStyle.DETROIT: 5,
}


@dataclass(frozen=True)
class GuestGroup:
    """Guests who will share one pizza. All members have the same exclusion set."""

    members: tuple

    @property
    def exclusions(self):
        return self.members[0].exclusions

    @property
    def dietary_restrictions(self):
        return dietary_label(self.members)

    def __len__(self):
        return len(self.members)


def dietary_label(members):
    """Sorted union of the restriction tags carried by `members`."""
    return tuple(sorted({r.value for m in members for r in m.restrictions}))


def compatibility_score(a, b):
    """
    2 points per shared like, minus 1 per topping one guest likes and the
    other dislikes. Symmetric; negative means net conflict.
    """
    return (
        2 * len(a.liked_toppings & b.liked_toppings)
        - len(a.liked_toppings & b.disliked_toppings)
        - len(b.liked_toppings & a.disliked_toppings)
    )


def partition_by_profile(guests):
    """Bucket guests by exclusion set, preserving first-seen order of buckets and guests."""
    buckets = {}
    for guest in guests:
        buckets.setdefault(guest.exclusions, []).append(guest)
    return list(buckets.values())


def cluster(bucket, max_size):
    """Greedily split one dietary bucket into groups of at most `max_size` guests."""
    if len(bucket) <= max_size:
        return [GuestGroup(tuple(bucket))]

    scores = [[compatibility_score(a, b) for b in bucket] for a in bucket]
    unassigned = list(range(len(bucket)))
    groups = []
    while unassigned:
        members = [unassigned.pop(0)]
        while unassigned and len(members) < max_size:
            # max() keeps the first of equal candidates, so ties go by input order
            best = max(unassigned, key=lambda j: sum(scores[m][j] for m in members))
            unassigned.remove(best)
            members.append(best)
        groups.append(GuestGroup(tuple(bucket[i] for i in members)))
    return groups


def group_guests(guests, style):
    """Partition normalized guests into pizza-sized groups for `style`."""
    max_size = MAX_GUESTS_PER_PIZZA[style]
    groups = []
    for bucket in partition_by_profile(guests):
        groups.extend(cluster(bucket, max_size))
    logger.debug("Grouped %d guests into %d groups (max %d per pizza)",
                 len(guests), len(groups), max_size)
    return groups
