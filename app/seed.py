# app/seed.py
"""
Sample catalog inserted on first boot (see Database.seed_products).
"""

_IMG = "https://placehold.co/400x400?text="

SAMPLE_PRODUCTS: list[dict] = [
    {
        "name": "Diamond Engagement Ring",
        "description": "Beautiful 1 carat diamond engagement ring in 18k white gold",
        "price": 2999.99,
        "image": _IMG + "Diamond+Engagement+Ring+with+sparkling+diamond+in+elegant+white+gold+setting",
        "category": "rings",
        "stock": 5,
    },
    {
        "name": "Pearl Necklace",
        "description": "Classic freshwater pearl necklace with sterling silver clasp",
        "price": 299.99,
        "image": _IMG + "Elegant+Pearl+Necklace+with+lustrous+white+pearls+and+silver+clasp",
        "category": "necklaces",
        "stock": 10,
    },
    {
        "name": "Gold Bracelet",
        "description": "Delicate 14k gold chain bracelet with heart charm",
        "price": 599.99,
        "image": _IMG + "Delicate+Gold+Bracelet+with+heart+charm+in+14k+yellow+gold",
        "category": "bracelets",
        "stock": 8,
    },
    {
        "name": "Sapphire Earrings",
        "description": "Stunning blue sapphire stud earrings in platinum setting",
        "price": 1299.99,
        "image": _IMG + "Blue+Sapphire+Stud+Earrings+in+elegant+platinum+setting",
        "category": "earrings",
        "stock": 6,
    },
    {
        "name": "Ruby Tennis Bracelet",
        "description": "Exquisite ruby tennis bracelet with diamonds in 18k gold",
        "price": 3999.99,
        "image": _IMG + "Ruby+Tennis+Bracelet+with+diamonds+in+luxurious+18k+gold",
        "category": "bracelets",
        "stock": 3,
    },
    {
        "name": "Emerald Pendant",
        "description": "Vintage-inspired emerald pendant with diamond halo",
        "price": 1899.99,
        "image": _IMG + "Emerald+Pendant+with+diamond+halo+in+vintage+inspired+design",
        "category": "necklaces",
        "stock": 4,
    },
]
