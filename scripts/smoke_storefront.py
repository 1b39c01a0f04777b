#!/usr/bin/env python3
"""
Prueba rápida contra un backend real: catálogo, categorías, contenido y
carrito. No crea pedidos ni pagos.

    API_URL=http://localhost:3000/api python scripts/smoke_storefront.py
"""

import asyncio
import logging

from storefront.api.deps import StorefrontContext
from storefront.core.config import Settings
from storefront.core.exceptions import StorefrontError
from storefront.core.logging_config import setup_logging
from storefront.db.storage import MemoryStorage
from storefront.services.money import format_money


async def run(config: Settings) -> bool:
    # Almacenamiento en memoria: la prueba no toca el estado guardado del usuario
    async with StorefrontContext(config, MemoryStorage()) as ctx:
        print("🔍 Productos...")
        products = await ctx.products.list_products()
        print(f"   {len(products)} productos")
        for product in products[:5]:
            print(f"   - {product.name}: {format_money(product.price, config.CURRENCY)}")

        print("\n📂 Categorías...")
        categories = await ctx.categories.list_categories()
        for category in categories:
            print(f"   - {category.name} ({category.slug})")

        if categories:
            in_category = await ctx.products.list_by_category(categories[0].slug)
            print(f"   {len(in_category)} productos en '{categories[0].slug}'")

        print("\n🖼️  Slides de portada...")
        slides = await ctx.hero_slides.list_slides()
        print(f"   {len(slides)} slides activos")

        print("\n📝 Contenido de la página principal...")
        blocks = await ctx.content.get_site_content("home")
        print(f"   {len(blocks)} bloques")

        if products:
            print("\n🛒 Carrito...")
            await ctx.cart.add_item(products[0], quantity=2)
            quote = ctx.checkout.quote("Lagos")
            print(f"   {ctx.cart.item_count()} artículos, subtotal {format_money(quote.subtotal, config.CURRENCY)}")
            print(f"   Envío a Lagos {format_money(quote.delivery_fee, config.CURRENCY)}, "
                  f"total {format_money(quote.total, config.CURRENCY)}")
    return True


def main():
    config = Settings()
    setup_logging(config)
    print(f"🌐 Backend: {config.API_URL}\n")
    try:
        asyncio.run(run(config))
        print("\n✅ Prueba completada")
    except StorefrontError as e:
        logging.getLogger(__name__).error(f"Prueba fallida: {e.message}")
        print(f"❌ Error: {e.message}")


if __name__ == "__main__":
    main()
