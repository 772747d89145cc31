"""Marketing content for the Elite Fitness landing page."""

from __future__ import annotations

from typing import Any

# ==========================================
# Brand & Contact Details
# ==========================================

BRAND_NAME = "ELITE FITNESS"
TAGLINE = "Transform your body and mind with expert guidance"
CONTACT_PHONE = "+1 (555) 123-4567"
CONTACT_EMAIL = "info@elitefitness.com"
CONTACT_ADDRESS = "123 Fitness Street, New York, NY 10001"
COPYRIGHT_YEAR = 2024

UNSPLASH_PARAMS = "crop=entropy&cs=srgb&fm=jpg&q=85"


def _unsplash(photo_id: str, width: int) -> str:
    return f"https://images.unsplash.com/{photo_id}?{UNSPLASH_PARAMS}&w={width}"


# ==========================================
# Navigation
# ==========================================
#
# (section id, label). Section ids double as in-page anchors.

NAV_LINKS: list[tuple[str, str]] = [
    ("home", "Home"),
    ("programs", "Programs"),
    ("trainers", "Trainers"),
    ("pricing", "Pricing"),
    ("contact", "Contact"),
]

FOOTER_QUICK_LINKS: list[tuple[str, str]] = [
    ("programs", "Programs"),
    ("trainers", "Trainers"),
    ("pricing", "Pricing"),
]

FOOTER_SUPPORT_LINKS: list[str] = ["FAQ", "Privacy Policy", "Terms of Service"]

# ==========================================
# Hero
# ==========================================

HERO: dict[str, str] = {
    "title": "TRANSFORM YOUR",
    "highlight": " BODY & MIND",
    "subtitle": (
        "Join Elite Fitness and unlock your full potential with world-class "
        "trainers, state-of-the-art equipment, and a community that motivates."
    ),
}

# ==========================================
# Features, Programs, Trainers
# ==========================================

Card = dict[str, Any]

FEATURES: list[Card] = [
    {
        "slug": "trainers",
        "icon": "users",
        "title": "Expert Trainers",
        "text": "Certified professionals dedicated to your fitness goals",
    },
    {
        "slug": "equipment",
        "icon": "dumbbell",
        "title": "Premium Equipment",
        "text": "State-of-the-art machines and free weights",
    },
    {
        "slug": "programs",
        "icon": "trophy",
        "title": "Custom Programs",
        "text": "Tailored workouts designed for your success",
    },
    {
        "slug": "flexible",
        "icon": "calendar",
        "title": "Flexible Schedule",
        "text": "24/7 access to fit your busy lifestyle",
    },
]

PROGRAMS: list[Card] = [
    {
        "slug": "strength",
        "title": "Strength Training",
        "image": _unsplash("photo-1761971975769-97e598bf526b", 800),
        "alt": "Strength Training",
        "text": (
            "Build muscle and increase power with our comprehensive "
            "strength programs"
        ),
        "highlights": [
            "Progressive overload techniques",
            "Personalized workout plans",
            "Nutrition guidance",
        ],
    },
    {
        "slug": "cardio",
        "title": "Cardio & Conditioning",
        "image": _unsplash("photo-1761971976282-b2bb051a5474", 800),
        "alt": "Cardio Training",
        "text": "Improve endurance and burn fat with high-intensity cardio workouts",
        "highlights": ["HIIT sessions", "Cycling classes", "Treadmill training"],
    },
    {
        "slug": "yoga",
        "title": "Yoga & Flexibility",
        "image": _unsplash("photo-1761971975858-c487bc10daab", 800),
        "alt": "Yoga",
        "text": "Enhance mobility and find balance through mindful movement",
        "highlights": [
            "Multiple yoga styles",
            "Meditation sessions",
            "Flexibility training",
        ],
    },
]

TRAINERS: list[Card] = [
    {
        "name": "Sarah Johnson",
        "role": "Head Strength Coach",
        "bio": "10+ years experience in strength and conditioning",
        "image": _unsplash("photo-1540205453279-389ebbc43b5b", 600),
    },
    {
        "name": "Michael Chen",
        "role": "Cardio Specialist",
        "bio": "Marathon runner and certified cardio trainer",
        "image": _unsplash("photo-1540206063137-4a88ca974d1a", 600),
    },
    {
        "name": "Emma Williams",
        "role": "Yoga Instructor",
        "bio": "Certified yoga teacher with holistic approach",
        "image": _unsplash("photo-1567281105113-a9b2effdc9a8", 600),
    },
]

# ==========================================
# Membership Plans
# ==========================================
#
# Keys must stay in sync with MembershipPlan in schemas.forms.

PLANS: list[Card] = [
    {
        "name": "Basic",
        "price": 29,
        "featured": False,
        "features": [
            "Gym access during off-peak hours",
            "Access to cardio equipment",
            "Locker room access",
        ],
    },
    {
        "name": "Pro",
        "price": 59,
        "featured": True,
        "badge": "MOST POPULAR",
        "features": [
            "24/7 gym access",
            "All equipment & classes",
            "Personal locker",
            "2 guest passes per month",
        ],
    },
    {
        "name": "Elite",
        "price": 99,
        "featured": False,
        "features": [
            "Everything in Pro",
            "4 personal training sessions",
            "Nutrition consultation",
            "Unlimited guest passes",
            "Priority class booking",
        ],
    },
]

TESTIMONIALS: list[Card] = [
    {
        "quote": (
            "Elite Fitness completely transformed my life. Lost 30 pounds in "
            "4 months and feel stronger than ever!"
        ),
        "author": "John Davis",
        "since": 2023,
    },
    {
        "quote": (
            "The trainers here are amazing. They pushed me beyond my limits and "
            "helped me achieve goals I never thought possible."
        ),
        "author": "Lisa Martinez",
        "since": 2022,
    },
    {
        "quote": (
            "Best gym I've ever joined. The community is so supportive and "
            "motivating. Worth every penny!"
        ),
        "author": "David Thompson",
        "since": 2024,
    },
]


def get_plan(name: str) -> Card | None:
    """Look up a plan by its display name (case-insensitive)."""
    wanted = name.strip().lower()
    for plan in PLANS:
        if plan["name"].lower() == wanted:
            return plan
    return None


def animated_section_ids() -> list[str]:
    """Ids of every block on the page that fades in when scrolled into view.

    Order follows the page from top to bottom.
    """
    ids = ["hero"]
    ids += [f"feature-{feature['slug']}" for feature in FEATURES]
    ids.append("programs-header")
    ids += [f"program-{program['slug']}" for program in PROGRAMS]
    ids.append("trainers-header")
    ids += [f"trainer-{index}" for index in range(1, len(TRAINERS) + 1)]
    ids.append("pricing-header")
    ids += [f"plan-{plan['name'].lower()}" for plan in PLANS]
    ids.append("testimonials-header")
    ids += [f"testimonial-{index}" for index in range(1, len(TESTIMONIALS) + 1)]
    ids += ["contact-info", "contact-form", "newsletter"]
    return ids
