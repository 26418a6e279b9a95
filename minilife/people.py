"""Relations of the player: creation, yearly ticking and interactions.

Family at birth: 2 parents, 0-3 siblings, 0-2 grandparents, 1-3 friends.
Each starts with closeness 30-80 and age 1-69.

Yearly tick (living people only):
  closeness  -1..+2, clamped 0-100
  age        +0..1, never below 1
  death      past person_death_age, p = (age - offset) / divisor

A person who dies keeps their place in the list and their history; they are
flagged alive=False and skip every later tick and interaction.

Interactions (closeness / player happiness / money):
  talk           +1..4   / 0..2  / -
  compliment     +3..8   / 1..3  / -
  gift           cost 5..80 rolled first; affordable: +4..10 / 1..4 / -cost
                 unaffordable: -1..4 / - / -
  spend_time     +5..12  / 2..6  / -
  insult         -6..20  / -1..4 / -
  ask_for_money  p = closeness/150: gain 10..200; refused: closeness -1..6

resolve_interaction() only computes the result; the engine applies it.
"""

from pydantic import BaseModel

from minilife.catalog import Catalog
from minilife.models import LifeRules, Person, Relation
from minilife.rng import RandomSource, chance, clamp, roll

ACTIONS = ("talk", "compliment", "gift", "spend_time", "insult", "ask_for_money")

_ACTION_ALIASES = {
    "spend-time": "spend_time",
    "spendtime": "spend_time",
    "ask-for-money": "ask_for_money",
    "askmoney": "ask_for_money",
}


class Interaction(BaseModel):
    """Computed result of one interaction, before it is applied."""

    action: str
    text: str
    closeness: int = 0
    happiness: int = 0
    money: int = 0


def normalize_action(action: str) -> str | None:
    """Map an action name or alias to its canonical name, or None if unknown."""
    key = action.strip().lower()
    key = _ACTION_ALIASES.get(key, key)
    return key if key in ACTIONS else None


def new_person(relation: Relation, rng: RandomSource, catalog: Catalog) -> Person:
    return Person(
        name=catalog.random_name(rng),
        relation=relation,
        relationship=roll(rng, 30, 80),
        age=max(1, roll(rng, 0, 69)),
    )


def generate_family(rng: RandomSource, catalog: Catalog) -> list[Person]:
    people = [new_person("parent", rng, catalog), new_person("parent", rng, catalog)]
    for relation, lo, hi in (("sibling", 0, 3), ("grandparent", 0, 2), ("friend", 1, 3)):
        for _ in range(roll(rng, lo, hi)):
            people.append(new_person(relation, rng, catalog))
    return people


def tick_person(person: Person, rng: RandomSource, rules: LifeRules) -> bool:
    """Advance one person by a year. Returns True if they died this tick."""
    if not person.alive:
        return False
    person.relationship = clamp(person.relationship + roll(rng, -1, 2))
    person.age = max(1, person.age + roll(rng, 0, 1))
    if person.age > rules.person_death_age:
        probability = (person.age - rules.person_death_offset) / rules.person_death_divisor
        if chance(rng, probability):
            person.alive = False
            person.history.append(f"Died at age {person.age}")
            return True
    return False


def resolve_interaction(
    person: Person, action: str, money: int, rng: RandomSource
) -> Interaction:
    """Roll the result of `action` (canonical name) towards `person`."""
    name = person.name
    if action == "talk":
        return Interaction(
            action=action, text=f"You had a chat with {name}.",
            closeness=roll(rng, 1, 4), happiness=roll(rng, 0, 2),
        )
    if action == "compliment":
        return Interaction(
            action=action, text=f"You complimented {name}. They appreciated it.",
            closeness=roll(rng, 3, 8), happiness=roll(rng, 1, 3),
        )
    if action == "gift":
        cost = roll(rng, 5, 80)
        if money >= cost:
            return Interaction(
                action=action, text=f"You gave {name} a gift (${cost}).",
                closeness=roll(rng, 4, 10), happiness=roll(rng, 1, 4), money=-cost,
            )
        return Interaction(
            action=action, text=f"You couldn't afford a gift for {name}.",
            closeness=-roll(rng, 1, 4),
        )
    if action == "spend_time":
        return Interaction(
            action=action, text=f"You spent quality time with {name}.",
            closeness=roll(rng, 5, 12), happiness=roll(rng, 2, 6),
        )
    if action == "insult":
        return Interaction(
            action=action, text=f"You insulted {name}. Ouch.",
            closeness=-roll(rng, 6, 20), happiness=-roll(rng, 1, 4),
        )
    if action == "ask_for_money":
        if chance(rng, person.relationship / 150):
            amount = roll(rng, 10, 200)
            return Interaction(action=action, text=f"{name} gave you ${amount}.", money=amount)
        return Interaction(
            action=action, text=f"{name} refused to lend you money.",
            closeness=-roll(rng, 1, 6),
        )
    raise ValueError(f"Unknown interaction: {action}")
