"""Shopping cart as a pure reducer.

The cart lives with the buyer's session, not in the database. Each action
produces a new immutable :class:`CartState`; totals are recomputed from the
lines on every transition instead of being adjusted incrementally.

Lines are keyed by product and chosen variant: adding the same pair again
merges quantities. Removing and re-quantifying address a product id across
all of its variants, which is how the cart page presents them.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class CartItem:
    product_id: str
    name: str
    unit_price: float
    quantity: int
    variant: str | None = None
    image: str | None = None

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity

    def same_line(self, other: "CartItem") -> bool:
        return self.product_id == other.product_id and self.variant == other.variant


@dataclass(frozen=True)
class CartState:
    items: tuple[CartItem, ...] = ()
    total: float = 0.0
    item_count: int = 0


@dataclass(frozen=True)
class AddItem:
    item: CartItem


@dataclass(frozen=True)
class RemoveItem:
    product_id: str


@dataclass(frozen=True)
class UpdateQuantity:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class ClearCart:
    pass


EMPTY_CART = CartState()


def _settle(items) -> CartState:
    items = tuple(items)
    return CartState(
        items=items,
        total=sum(item.line_total for item in items),
        item_count=sum(item.quantity for item in items),
    )


def reduce(state: CartState, action) -> CartState:
    """Apply ``action`` to ``state`` and return the next state."""
    if isinstance(action, AddItem):
        new = action.item
        if any(item.same_line(new) for item in state.items):
            items = [
                replace(item, quantity=item.quantity + new.quantity) if item.same_line(new) else item
                for item in state.items
            ]
        else:
            items = [*state.items, new]
        return _settle(items)

    if isinstance(action, RemoveItem):
        return _settle(item for item in state.items if item.product_id != action.product_id)

    if isinstance(action, UpdateQuantity):
        if action.quantity <= 0:
            return reduce(state, RemoveItem(product_id=action.product_id))
        return _settle(
            replace(item, quantity=action.quantity) if item.product_id == action.product_id else item
            for item in state.items
        )

    if isinstance(action, ClearCart):
        return EMPTY_CART

    raise TypeError(f"Unknown cart action: {type(action).__name__}")


def replay(actions, state: CartState = EMPTY_CART) -> CartState:
    """Fold a sequence of actions over ``state``."""
    for action in actions:
        state = reduce(state, action)
    return state
