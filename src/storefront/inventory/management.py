"""Product registration, repricing and restocking: commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.inventory.ledger import InventoryLedger
from storefront.inventory.product import Product


@storefront.command(part_of="Product")
class CreateProduct:
    title = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    thumbnail = String(max_length=1024)
    quantity = Integer(default=0, min_value=0)
    owner_id = Identifier()


@storefront.command(part_of="Product")
class UpdateProductPrice:
    product_id = Identifier(required=True)
    price = Float(required=True, min_value=0.0)


@storefront.command(part_of="Product")
class RestockProduct:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            title=command.title,
            description=command.description,
            price=command.price,
            thumbnail=command.thumbnail,
            available_quantity=command.quantity or 0,
            owner_id=command.owner_id,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProductPrice)
    def update_product_price(self, command):
        ledger = InventoryLedger()
        product = ledger.product(command.product_id)
        product.reprice(command.price)
        ledger.products.add(product)

    @handle(RestockProduct)
    def restock_product(self, command):
        InventoryLedger().release(command.product_id, command.quantity)
