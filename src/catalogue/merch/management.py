"""Catalogue maintenance: commands and handler used for seeding the collection."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.merch.merch import MerchItem


@catalogue.command(part_of="MerchItem")
class AddMerchItem:
    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    sizes: Text()  # JSON array of size labels
    image: String(max_length=1024)
    tone: String(max_length=100)
    tag: String(max_length=100)
    sort_order: Integer(default=0)


@catalogue.command(part_of="MerchItem")
class DeactivateMerchItem:
    item_id: Identifier(required=True)


@catalogue.command_handler(part_of=MerchItem)
class ManageMerchHandler:
    @handle(AddMerchItem)
    def add_merch_item(self, command):
        sizes = json.loads(command.sizes) if isinstance(command.sizes, str) and command.sizes else command.sizes
        item = MerchItem.create(
            name=command.name,
            price=command.price,
            sizes=sizes,
            image=command.image,
            tone=command.tone,
            tag=command.tag,
            sort_order=command.sort_order or 0,
        )
        current_domain.repository_for(MerchItem).add(item)
        return str(item.id)

    @handle(DeactivateMerchItem)
    def deactivate_merch_item(self, command):
        repo = current_domain.repository_for(MerchItem)
        item = repo.get(command.item_id)
        item.deactivate()
        repo.add(item)
