"""
Sample media and review text used by the seeder.
"""

agent_images = [
    f"https://i.pravatar.cc/300?img={n}" for n in (3, 8, 11, 12, 15, 33)
]

review_images = [
    f"https://i.pravatar.cc/150?img={n}" for n in (5, 9, 14, 20, 25, 32, 44, 47, 52, 60)
]

gallery_images = [
    f"https://picsum.photos/seed/restate-gallery-{n}/800/600" for n in range(1, 11)
]

properties_images = [
    f"https://picsum.photos/seed/restate-property-{n}/1200/800" for n in range(1, 17)
]

sample_reviews = [
    "Amazing property! Loved the location and amenities.",
    "Great place to live. Would definitely recommend.",
    "The property exceeded my expectations. Highly satisfied!",
    "Perfect home for my family. Excellent condition.",
    "Wonderful experience. The agent was very helpful.",
    "Beautiful design and great neighborhood.",
    "Very comfortable and well-maintained property.",
    "Fantastic investment. Great return potential.",
    "Absolutely love it here. Can't ask for better!",
    "Highly recommended. Best decision ever made.",
    "Top-notch property with excellent features.",
    "Exceeded all expectations. Worth every penny.",
    "Great community and friendly atmosphere.",
    "Professional service and quality property.",
    "Couldn't be happier with my choice.",
]
