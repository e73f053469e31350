"""Simple entrypoint to run the Wardrobe Studio locally without network access."""

import json

from agents.image_provider import MockImageProvider
from logic.export import solid_image_data_uri
from memory.local_storage import InMemoryLocalStorage
from studio_app.app import WardrobeStudioApp
from studio_app.config import StudioConfig


def main() -> None:
    app = WardrobeStudioApp(
        config=StudioConfig(storage_backend="memory"),
        storage=InMemoryLocalStorage(),
        provider=MockImageProvider(),
    )
    added = app.add_item("Red Scarf", "Accessories", solid_image_data_uri(200), tags="winter, cozy")
    app.drop_item(added["item"]["id"], 50, 50)
    app.save_outfit("Test Look")

    gallery = app.list_outfits()["outfits"]
    summary = [
        {"name": outfit["name"], "items": [placed["item"]["name"] for placed in outfit["items"]]}
        for outfit in gallery
    ]
    print(json.dumps(summary, indent=2))
    app.shutdown()


if __name__ == "__main__":
    main()
