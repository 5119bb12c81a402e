"""Local psychology facts and curated quotes used when external content is unavailable"""

import random
from typing import Dict, List, Optional

from revelation_gateway.domain.models import PsychologyFact, Quote

PSYCHOLOGY_FACTS: List[PsychologyFact] = [
    PsychologyFact(
        fact="People spend 12-18% more when paying by card rather than cash",
        source="MIT Sloan Study, 2001",
        category="spending",
        relevance=9,
    ),
    PsychologyFact(
        fact="Automating savings raises the savings rate by 85% on average",
        source="Behavioral Economics Research",
        category="saving",
        relevance=10,
    ),
    PsychologyFact(
        fact="Financial decisions made under stress are 23% less optimal",
        source="Journal of Economic Psychology",
        category="emotional",
        relevance=8,
    ),
    PsychologyFact(
        fact="It takes 66 days on average to build a new financial habit",
        source="University College London",
        category="behavioral",
        relevance=9,
    ),
    PsychologyFact(
        fact="People who visualize their goals are 42% more likely to reach them",
        source="Dominican University Study",
        category="goals",
        relevance=10,
    ),
    PsychologyFact(
        fact="The anchoring effect makes us overvalue the first price we see",
        source="Kahneman & Tversky Research",
        category="cognitive",
        relevance=7,
    ),
    PsychologyFact(
        fact="We feel the pain of a loss twice as strongly as the pleasure of an equal gain",
        source="Prospect Theory",
        category="emotional",
        relevance=9,
    ),
    PsychologyFact(
        fact="People spend 'bonus' money more freely than their regular salary",
        source="Mental Accounting Research",
        category="spending",
        relevance=8,
    ),
]

CURATED_QUOTES: Dict[str, List[Quote]] = {
    "spending": [
        Quote("It's not how much money you make, but how much money you keep.", "Robert Kiyosaki"),
        Quote("Beware of little expenses; a small leak will sink a great ship.", "Benjamin Franklin"),
    ],
    "saving": [
        Quote("Do not save what is left after spending, but spend what is left after saving.", "Warren Buffett"),
        Quote("A penny saved is a penny earned.", "Benjamin Franklin"),
        Quote("Pay yourself first.", "Robert Kiyosaki"),
    ],
    "goals": [
        Quote("A goal without a plan is just a wish.", "Antoine de Saint-Exupery"),
        Quote("Discipline is the bridge between goals and accomplishment.", "Jim Rohn"),
    ],
    "finance": [
        Quote("An investment in knowledge pays the best interest.", "Benjamin Franklin"),
        Quote("Time is your friend; impulse is your enemy.", "John Bogle"),
    ],
}

GENERIC_QUOTES: List[Quote] = [
    Quote("Success is not final, failure is not fatal: it is the courage to continue that counts.", "Winston Churchill"),
    Quote("Wealth consists not in having great possessions, but in having few wants.", "Epictetus"),
    Quote("The only limit is the one you set yourself.", "Anonymous"),
]


def get_psychology_facts(category: Optional[str] = None) -> List[PsychologyFact]:
    """Top 3 facts by relevance for a category, or top 5 overall"""
    if category:
        facts = [f for f in PSYCHOLOGY_FACTS if f.category == category]
        return sorted(facts, key=lambda f: f.relevance, reverse=True)[:3]
    return sorted(PSYCHOLOGY_FACTS, key=lambda f: f.relevance, reverse=True)[:5]


def random_psychology_facts(rng: random.Random, k: int = 3) -> List[PsychologyFact]:
    return rng.sample(PSYCHOLOGY_FACTS, min(k, len(PSYCHOLOGY_FACTS)))


def fallback_quote(category: Optional[str], rng: random.Random) -> Quote:
    """Curated quote for the category, or one from the generic pool"""
    pool = CURATED_QUOTES.get(category or "") or GENERIC_QUOTES
    return rng.choice(pool)
