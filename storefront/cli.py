"""Flask CLI commands for admin operations."""
import click


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        from storefront.extensions import db

        db.create_all()
        click.echo("Database initialized.")

    @app.cli.command("seed-demo")
    def seed_demo():
        """Seed a demo product root with options (idempotent)."""
        from storefront.schemas import ProductCreationInput
        from storefront.services import product_service

        if product_service.root_with_sku_prefix_exists("demo-shirt"):
            click.echo("Demo product already exists, skipping demo seed.")
            return

        data = ProductCreationInput(
            name="Demo Shirt",
            sku="demo-shirt",
            description="A plain cotton shirt.",
            brand="Storefront",
            price=19.99,
            quantity=10,
            options=[
                {"name": "color", "values": ["red", "blue", "green"]},
                {"name": "size", "values": ["S", "M", "L"]},
            ],
        )
        root = product_service.create_product(data)
        click.echo(f"Seeded {root['sku_prefix']} with {len(root['products'])} products.")

    @app.cli.command("stats")
    def stats():
        """Show counts of active product roots, products and webhooks."""
        from storefront.models import Product, ProductRoot, Webhook

        click.echo(f"Product roots: {ProductRoot.active().count()}")
        click.echo(f"Products: {Product.active().count()}")
        click.echo(f"Webhooks: {Webhook.active().count()}")
