"""Cart line management: commands and handler.

Each handler pairs the cart change with the matching inventory movement.
Protean runs every handler inside a unit of work, so the cart write and the
product write either both commit or neither does.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.errors import NotFoundError
from storefront.inventory.ledger import InventoryLedger


@storefront.command(part_of="Cart")
class AddProductToCart:
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@storefront.command(part_of="Cart")
class RemoveProductFromCart:
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class IncrementCartItem:
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    increment_by = Integer(default=1, min_value=1)


@storefront.command(part_of="Cart")
class DecrementCartItem:
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    decrement_by = Integer(default=1, min_value=1)


def _existing_cart(repo, owner_id):
    cart = repo.for_owner(owner_id)
    if cart is None:
        raise NotFoundError("Cart not found")
    return cart


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddProductToCart)
    def add_product_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_owner(command.owner_id) or Cart.create(owner_id=command.owner_id)

        InventoryLedger().reserve(command.product_id, command.quantity)
        cart.add_item(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)
        return str(cart.id)

    @handle(RemoveProductFromCart)
    def remove_product_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.owner_id)

        quantity = cart.remove_item(command.product_id)
        InventoryLedger().release(command.product_id, quantity)
        repo.add(cart)
        return str(cart.id)

    @handle(IncrementCartItem)
    def increment_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.owner_id)

        cart.increment_item(command.product_id, by=command.increment_by)
        InventoryLedger().reserve(command.product_id, command.increment_by)
        repo.add(cart)
        return str(cart.id)

    @handle(DecrementCartItem)
    def decrement_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.owner_id)

        released = cart.decrement_item(command.product_id, by=command.decrement_by)
        InventoryLedger().release(command.product_id, released)
        repo.add(cart)
        return str(cart.id)
