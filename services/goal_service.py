import logging
from dataclasses import replace
from decimal import Decimal

import duckdb

from db import get_db
from models.goal import Goal
from repositories import goals_repository
from services.errors import NonPositiveContribution, NotFound, ValidationError, WriteFailed
from utils.money import MAX_STORED_AMOUNT, to_money


def contribute(goal: Goal, amount) -> Goal:
    """Return ``goal`` with ``amount`` added; the input goal is left untouched."""
    amount = to_money(amount)
    if amount <= 0:
        raise NonPositiveContribution(amount)
    return replace(goal, current_amount=goal.current_amount + amount)


def is_complete(goal: Goal) -> bool:
    return goal.current_amount >= goal.target_amount


def progress(goal: Goal) -> Decimal:
    """Percent of target reached, capped at 100."""
    pct = goal.current_amount / goal.target_amount * 100
    return min(pct, Decimal("100")).quantize(Decimal("0.1"))


def _check_storable(label, amount):
    if amount > MAX_STORED_AMOUNT:
        raise ValidationError(f"{label} must not exceed {MAX_STORED_AMOUNT:,}")


def create_goal(owner, name, target_amount, current_amount=0, deadline=None, category=None) -> Goal:
    if not name or not name.strip():
        raise ValidationError("Goal name is required")
    try:
        target_amount = to_money(target_amount)
        current_amount = to_money(current_amount)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    if target_amount <= 0:
        raise ValidationError("Goal target must be greater than zero")
    if current_amount < 0:
        raise ValidationError("Goal initial amount cannot be negative")
    _check_storable("Goal target", target_amount)
    _check_storable("Goal initial amount", current_amount)

    goal = Goal(
        id=None,
        owner=owner,
        name=name.strip(),
        target_amount=target_amount,
        current_amount=current_amount,
        deadline=deadline,
        category=category,
    )
    conn = get_db()
    try:
        goal = replace(goal, id=goals_repository.insert_goal(conn, goal))
    except duckdb.Error as e:
        logging.error(f"Goal insert failed for {owner}: {e}")
        raise WriteFailed(f"Goal {goal.name!r} could not be saved") from e
    finally:
        conn.close()

    logging.info(f"Goal {goal.id} created for {owner}: {goal.name} target {target_amount}")
    return goal


def list_goals(owner):
    conn = get_db()
    try:
        return goals_repository.list_goals(conn, owner)
    finally:
        conn.close()


def _get_owned(conn, owner, goal_id):
    goal = goals_repository.get_goal(conn, goal_id)
    if goal is None or goal.owner != owner:
        raise NotFound(f"Goal {goal_id} not found")
    return goal


def add_contribution(owner, goal_id, amount) -> Goal:
    conn = get_db()
    try:
        goal = contribute(_get_owned(conn, owner, goal_id), amount)
        _check_storable("Goal balance", goal.current_amount)
        try:
            updated = goals_repository.update_current_amount(conn, goal_id, goal.current_amount)
        except duckdb.Error as e:
            logging.error(f"Goal {goal_id} update failed: {e}")
            raise WriteFailed(f"Goal {goal_id} could not be updated") from e
        if not updated:
            raise WriteFailed(f"Goal {goal_id} could not be updated")
    finally:
        conn.close()

    logging.info(f"Goal {goal_id} contribution {amount}; now {goal.current_amount}/{goal.target_amount}")
    if is_complete(goal):
        logging.info(f"Goal {goal_id} reached its target")
    return goal


def delete_goal(owner, goal_id):
    conn = get_db()
    try:
        _get_owned(conn, owner, goal_id)
        goals_repository.delete_goal(conn, goal_id)
    finally:
        conn.close()
