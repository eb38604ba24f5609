"""Shopping Cart aggregate: the lines a session has staged before checkout.

One cart per browsing session. Each line pairs a design with a fabric and
carries snapshots of both, so the line total is fixed at the moment the line
was added. There is no quantity and no de-duplication: adding the same pair
twice stages two lines.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from tailoring.cart.events import (
    CartCheckedOut,
    CartCleared,
    CartCreated,
    CartLineAdded,
    CartLineRemoved,
    CartsMerged,
)
from tailoring.catalogue.item import ItemSnapshot
from tailoring.domain import tailoring


class CartStatus(Enum):
    ACTIVE = "Active"
    MERGED = "Merged"


def line_price(design: ItemSnapshot, fabric: ItemSnapshot) -> float:
    return design.price + fabric.price


def format_amount(amount: float) -> str:
    return f"{amount:.2f}"


@tailoring.entity(part_of="ShoppingCart")
class CartLine:
    seq = Integer(required=True, min_value=1)
    design = ValueObject(ItemSnapshot, required=True)
    fabric = ValueObject(ItemSnapshot, required=True)
    total_price = Float(required=True, min_value=0.0)
    added_at = DateTime()


@tailoring.aggregate
class ShoppingCart:
    customer_id = Identifier()
    session_id = String(max_length=255)
    lines = HasMany(CartLine)
    status = String(choices=CartStatus, default=CartStatus.ACTIVE.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def line_totals_match_their_snapshots(self):
        for line in self.lines:
            if round(line.total_price, 2) != round(line_price(line.design, line.fabric), 2):
                raise ValidationError({"lines": [f"Line {line.seq} total does not match design and fabric prices"]})

    @classmethod
    def create(cls, customer_id=None, session_id=None):
        now = datetime.now(UTC)
        cart = cls(
            customer_id=customer_id,
            session_id=session_id,
            status=CartStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        cart.raise_(
            CartCreated(
                cart_id=str(cart.id),
                customer_id=str(customer_id) if customer_id else None,
                session_id=session_id,
            )
        )
        return cart

    # -------------------------------------------------------------------
    # Lines
    # -------------------------------------------------------------------
    @property
    def ordered_lines(self) -> list[CartLine]:
        """Lines in the order they were added."""
        return sorted(self.lines, key=lambda line: line.seq)

    def _ensure_active(self, action):
        if CartStatus(self.status) != CartStatus.ACTIVE:
            raise ValidationError({"status": [f"Cannot {action} a cart that is {self.status}"]})

    def _next_seq(self):
        return max((line.seq for line in self.lines), default=0) + 1

    def _append(self, design, fabric, now):
        line = CartLine(
            seq=self._next_seq(),
            design=design,
            fabric=fabric,
            total_price=line_price(design, fabric),
            added_at=now,
        )
        self.add_lines(line)
        return line

    def add_line(self, design: ItemSnapshot, fabric: ItemSnapshot):
        self._ensure_active("add lines to")

        now = datetime.now(UTC)
        line = self._append(design, fabric, now)
        self.updated_at = now

        self.raise_(
            CartLineAdded(
                cart_id=str(self.id),
                line_id=str(line.id),
                design_id=str(design.item_id),
                fabric_id=str(fabric.item_id),
                total_price=line.total_price,
            )
        )
        return line

    def remove_line(self, index: int):
        """Remove the line at ``index`` (zero-based, in insertion order)."""
        self._ensure_active("remove lines from")

        lines = self.ordered_lines
        if index < 0 or index >= len(lines):
            raise ValidationError({"index": [f"No cart line at position {index}"]})

        line = lines[index]
        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartLineRemoved(cart_id=str(self.id), line_id=str(line.id), index=index))

    def _empty(self):
        removed = list(self.lines)
        for line in removed:
            self.remove_lines(line)
        self.updated_at = datetime.now(UTC)
        return len(removed)

    def clear(self):
        self._ensure_active("clear")
        count = self._empty()
        self.raise_(CartCleared(cart_id=str(self.id), lines_removed=count))

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    def total(self) -> float:
        return sum((line.total_price for line in self.lines), 0.0)

    def formatted_total(self) -> str:
        return format_amount(self.total())

    # -------------------------------------------------------------------
    # Checkout and merging
    # -------------------------------------------------------------------
    def check_out(self, order_id):
        """Empty the cart after its lines became ``order_id``.

        The cart stays active so the same session can keep shopping.
        """
        self._ensure_active("check out")
        if not self.lines:
            raise ValidationError({"cart": ["Cart is empty"]})

        line_count = len(self.lines)
        total = self.total()
        self._empty()

        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                order_id=str(order_id),
                line_count=line_count,
                total=total,
            )
        )

    def merge_from(self, guest_cart: "ShoppingCart"):
        """Move every line of ``guest_cart`` to the end of this cart.

        Only a cart without a customer can be merged. The guest cart is left
        empty and marked Merged.
        """
        self._ensure_active("merge into")
        if str(guest_cart.id) == str(self.id):
            raise ValidationError({"guest_cart_id": ["A cart cannot be merged into itself"]})
        if guest_cart.customer_id:
            raise ValidationError({"guest_cart_id": ["Only a guest cart can be merged into a customer cart"]})
        guest_cart._ensure_active("merge")

        now = datetime.now(UTC)
        guest_lines = guest_cart.ordered_lines
        for line in guest_lines:
            self._append(line.design, line.fabric, now)
        self.updated_at = now

        guest_cart._empty()
        guest_cart.status = CartStatus.MERGED.value

        self.raise_(
            CartsMerged(
                cart_id=str(self.id),
                guest_cart_id=str(guest_cart.id),
                lines_merged=len(guest_lines),
            )
        )
