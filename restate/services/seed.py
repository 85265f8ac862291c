"""
Seeding service: wipes the listing collections and fills them with generated data.
"""

from typing import List, Optional, Sequence, TypeVar
import logging
import random

from restate import data
from restate.appwrite import AppwriteClient
from restate.config import Settings, settings as default_settings
from restate.models.property import PropertyType, Facility
from restate.repositories import (
    BaseRepository,
    PropertyRepository,
    AgentRepository,
    ReviewRepository,
    GalleryRepository
)
from restate.schemas.agent import AgentCreate
from restate.schemas.gallery import GalleryCreate
from restate.schemas.property import PropertyCreate
from restate.schemas.review import ReviewCreate
from restate.schemas.seed import SeedReport

logger = logging.getLogger(__name__)

T = TypeVar("T")

AGENT_COUNT = 5
PROPERTY_COUNT = 20
GALLERIES_PER_PROPERTY = (3, 5)
REVIEWS_PER_PROPERTY = (5, 7)


def get_random_subset(
    items: Sequence[T],
    min_items: int,
    max_items: int,
    rng: Optional[random.Random] = None
) -> List[T]:
    """
    Pick a random-sized random subset of `items`.

    The size is uniform in [min_items, max_items]; the elements come from a
    Fisher-Yates shuffle of a copy, so `items` is left untouched.

    Raises:
        ValueError: If the bounds are inverted or outside [0, len(items)]
    """
    rng = rng or random.Random()

    if min_items > max_items:
        raise ValueError("min_items cannot be greater than max_items")
    if min_items < 0 or max_items > len(items):
        raise ValueError("min_items or max_items are out of valid range for the items")

    subset_size = rng.randint(min_items, max_items)

    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]

    return shuffled[:subset_size]


class SeedService:
    """
    Rebuilds the sample dataset: agents, galleries, properties and their reviews.
    Needs a client authenticated with a server API key.
    """

    def __init__(
        self,
        client: AppwriteClient,
        config: Optional[Settings] = None,
        rng: Optional[random.Random] = None
    ):
        config = config or default_settings
        database_id = config.appwrite_database_id
        self.rng = rng or random.Random()
        self.agent_repo = AgentRepository(client, database_id, config.appwrite_agents_collection_id)
        self.review_repo = ReviewRepository(client, database_id, config.appwrite_reviews_collection_id)
        self.gallery_repo = GalleryRepository(client, database_id, config.appwrite_galleries_collection_id)
        self.property_repo = PropertyRepository(client, database_id, config.appwrite_properties_collection_id)

    @property
    def repositories(self) -> List[BaseRepository]:
        return [self.agent_repo, self.review_repo, self.gallery_repo, self.property_repo]

    async def clear(self) -> int:
        """Delete every document in the seeded collections."""
        deleted = 0
        for repo in self.repositories:
            deleted += await repo.delete_all()
        logger.info("Cleared all existing data.")
        return deleted

    async def seed_agents(self, report: SeedReport) -> List[str]:
        for i in range(1, AGENT_COUNT + 1):
            agent = AgentCreate(
                name=f"Agent {i}",
                email=f"agent{i}@example.com",
                avatar=self.rng.choice(data.agent_images),
            )
            document = await self.agent_repo.create(agent.model_dump(mode="json"))
            report.agents.append(document["$id"])
        logger.info(f"Seeded {len(report.agents)} agents.")
        return report.agents

    async def seed_galleries(self, report: SeedReport) -> List[str]:
        for image in data.gallery_images:
            document = await self.gallery_repo.create(GalleryCreate(image=image).model_dump())
            report.galleries.append(document["$id"])
        logger.info(f"Seeded {len(report.galleries)} galleries.")
        return report.galleries

    def build_property(self, i: int, agent_id: str) -> PropertyCreate:
        """Generated attributes for the i-th property (1-based)."""
        rng = self.rng
        facilities = list(Facility)
        images = data.properties_images

        image = images[i] if len(images) - 1 >= i else rng.choice(images)

        return PropertyCreate(
            name=f"Property {i}",
            type=rng.choice(list(PropertyType)),
            description=f"This is the description for Property {i}.",
            address=f"123 Property Street, City {i}",
            geolocation=f"192.168.1.{i}, 192.168.1.{i}",
            price=rng.randint(1000, 9999),
            area=rng.randint(500, 3499),
            bedrooms=rng.randint(1, 5),
            bathrooms=rng.randint(1, 5),
            rating=rng.randint(1, 5),
            facilities=rng.sample(facilities, rng.randint(1, len(facilities))),
            image=image,
            agent=agent_id,
        )

    def build_review(self, property_id: str) -> ReviewCreate:
        return ReviewCreate(
            name=f"Reviewer {self.rng.randint(1, 100)}",
            avatar=self.rng.choice(data.review_images),
            review=self.rng.choice(data.sample_reviews),
            rating=self.rng.randint(1, 5),
            property=property_id,
        )

    async def seed_properties(self, report: SeedReport) -> List[str]:
        for i in range(1, PROPERTY_COUNT + 1):
            agent_id = self.rng.choice(report.agents)
            assigned_galleries = get_random_subset(report.galleries, *GALLERIES_PER_PROPERTY, rng=self.rng)

            document = await self.property_repo.create(self.build_property(i, agent_id).to_document())
            property_id = document["$id"]
            report.properties.append(property_id)
            report.property_galleries[property_id] = assigned_galleries

            review_count = self.rng.randint(*REVIEWS_PER_PROPERTY)
            for _ in range(review_count):
                review = await self.review_repo.create(self.build_review(property_id).model_dump())
                report.reviews.append(review["$id"])

            logger.info(
                f"Seeded property: {document.get('name')} with {review_count} reviews "
                f"and {len(assigned_galleries)} galleries"
            )
        return report.properties

    async def seed(self) -> SeedReport:
        """
        Clear the collections and generate a fresh dataset.

        Returns:
            Report of the created documents

        Raises:
            AppwriteException: If any remote call fails; the run stops there
        """
        report = SeedReport()
        try:
            await self.clear()
            await self.seed_agents(report)
            await self.seed_galleries(report)
            await self.seed_properties(report)

            logger.info(f"Seeded {len(report.reviews)} total reviews across all properties.")
            logger.info("Data seeding completed.")
            return report
        except Exception as e:
            logger.error(
                f"Error seeding data: {e}",
                extra={
                    "error_message": getattr(e, "message", str(e)),
                    "error_code": getattr(e, "code", None),
                    "error_response": getattr(e, "response", None),
                }
            )
            raise
