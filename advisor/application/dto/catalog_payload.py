from __future__ import annotations

from pydantic import BaseModel, TypeAdapter

from advisor.domain.entities.product import Product


class ProductDTO(BaseModel):
    id: int
    name: str
    brand: str
    category: str
    image: str
    description: str = ""

    def to_product(self) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            brand=self.brand,
            category=self.category,
            image=self.image,
            description=self.description,
        )


class CatalogPayloadDTO(BaseModel):
    products: list[ProductDTO]

    def to_products(self) -> list[Product]:
        return [p.to_product() for p in self.products]


PRODUCT_LIST_ADAPTER = TypeAdapter(list[ProductDTO])
