#!/usr/bin/env python3
"""
Script de depuración para inspeccionar el estado persistido del cliente
Útil para ver el carrito, la lista de deseos, el tema y si hay sesión iniciada
"""

import argparse
import asyncio
import json
import sys
from pprint import pprint

from storefront.core.config import Settings
from storefront.core.exceptions import StorageError
from storefront.db.storage import create_storage
from storefront.services.money import format_money


def parse_document(raw):
    """Intenta parsear el documento como JSON; si no, lo devuelve tal cual"""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def print_cart(document, currency: str):
    print("🛒 CARRITO:")
    print("=" * 50)
    if not isinstance(document, dict) or not document.get("items"):
        print("   (vacío)")
        return
    total = 0
    for item in document["items"]:
        subtotal = item.get("price", 0) * item.get("quantity", 0)
        total += subtotal
        print(f"   - {item.get('name', 'N/A')} x{item.get('quantity', 0)} = {format_money(subtotal, currency)}")
    print(f"💰 Total: {format_money(total, currency)}")


def print_wishlist(document):
    print("\n💜 LISTA DE DESEOS:")
    print("=" * 50)
    if not isinstance(document, dict) or not document.get("items"):
        print("   (vacía)")
        return
    for item in document["items"]:
        print(f"   - {item.get('name', 'N/A')} ({item.get('id')})")


async def inspect(config: Settings, key: str = None):
    storage = create_storage(config)
    try:
        if key:
            print(f"🎯 INSPECCIONANDO KEY ESPECÍFICA: {key}")
            print("=" * 60)
            document = parse_document(await storage.get(key))
            if document is None:
                print(f"❌ La key '{key}' no existe")
            else:
                pprint(document, width=100, depth=4)
            return

        print_cart(parse_document(await storage.get(config.CART_STORAGE_KEY)), config.CURRENCY)
        print_wishlist(parse_document(await storage.get(config.WISHLIST_STORAGE_KEY)))

        theme = parse_document(await storage.get(config.THEME_STORAGE_KEY))
        is_dark = theme.get("isDark", True) if isinstance(theme, dict) else True
        print(f"\n🎨 Tema: {'oscuro' if is_dark else 'claro'}")

        # El token nunca se imprime, solo se indica si existe
        has_token = bool(await storage.get(config.AUTH_TOKEN_KEY))
        print(f"🔑 Sesión de administración: {'sí' if has_token else 'no'}")
    finally:
        await storage.close()


def main():
    """Función principal"""
    parser = argparse.ArgumentParser(description="Inspecciona el estado persistido del cliente de la tienda")
    parser.add_argument("key", nargs="?", help="Key concreta a inspeccionar")
    parser.add_argument("--backend", choices=["memory", "file", "redis"], help="Sobrescribe STORAGE_BACKEND")
    parser.add_argument("--dir", help="Sobrescribe STORAGE_DIR")
    args = parser.parse_args()

    overrides = {}
    if args.backend:
        overrides["STORAGE_BACKEND"] = args.backend
    if args.dir:
        overrides["STORAGE_DIR"] = args.dir
    config = Settings(**overrides)

    print(f"🔍 Inspeccionando almacenamiento '{config.STORAGE_BACKEND}'\n")
    try:
        asyncio.run(inspect(config, args.key))
    except StorageError as e:
        print(f"❌ Error: {e.message}")
        if config.STORAGE_BACKEND == "redis":
            print("💡 Asegúrate de que Redis esté ejecutándose")
        sys.exit(1)


if __name__ == "__main__":
    main()
