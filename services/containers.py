"""
Container Requirement Service

Counts physical containers needed for the day. A container is needed
once per diner of each plan that uses it, however many of the plan's
menus are served in it.
"""

import logging
import math

from .records import ContainerRequirement

logger = logging.getLogger(__name__)


def distinct_containers(items):
    """
    Distinct (container_id, container_name) pairs in first-seen order.

    items are selections or portion seeds of ONE meal plan. Items without
    a container are skipped.
    """
    seen = {}
    for item in items:
        if item.container_id is None or item.container_id in seen:
            continue
        seen[item.container_id] = item.container_name
    return list(seen.items())


def container_demand(seeds):
    """
    Needed quantity per container id across plans.

    Pass 1 takes each plan's distinct containers with the plan headcount
    once; pass 2 sums over plans. Returns {container_id: (quantity, name)}
    where name is the last one captured at selection time.
    """
    by_plan = {}
    for seed in seeds:
        by_plan.setdefault(seed.meal_plan_id, []).append(seed)

    demand = {}
    for plan_id, plan_seeds in by_plan.items():
        headcount = plan_seeds[0].headcount
        for container_id, container_name in distinct_containers(plan_seeds):
            quantity, name = demand.get(container_id, (0, None))
            demand[container_id] = (quantity + headcount, container_name or name)
    return demand


def aggregate_container_requirements(seeds, catalog):
    """Build one requirement per container with price and stock merged in."""
    requirements = []
    for container_id, (quantity, captured_name) in container_demand(seeds).items():
        master = catalog.containers.get(container_id)
        if master is None:
            logger.warning(f"Container {container_id} ({captured_name}) not in master; unpriced")
            stock = catalog.container_stock(container_id)
            requirements.append(ContainerRequirement(
                container_id=container_id,
                name=captured_name or container_id,
                needed_quantity=quantity,
                current_stock=stock.current_quantity if stock else None,
                stock_updated_at=stock.last_updated if stock else None,
                stock_source_id=container_id,
            ))
            continue

        stock = catalog.container_stock(master.stock_source_id)
        requirements.append(ContainerRequirement(
            container_id=container_id,
            name=master.name,
            code_name=master.code_name,
            needed_quantity=quantity,
            price=master.price,
            total_price=master.price * quantity if master.price is not None else 0.0,
            current_stock=stock.current_quantity if stock else None,
            stock_updated_at=stock.last_updated if stock else None,
            stock_source_id=master.stock_source_id,
            is_group_stock=master.parent_container_id is not None,
        ))

    requirements.sort(key=lambda r: (r.name, r.container_id))
    return requirements


def container_cost_total(requirements):
    """Return (sum of total prices, ids of unpriced containers)."""
    total = math.fsum(r.total_price for r in requirements)
    unpriced = tuple(r.container_id for r in requirements if not r.priced)
    return total, unpriced
