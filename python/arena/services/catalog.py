"""Static reference data for the arena.

Read-only collections consumed by the rest of the service:
- MODELS: the model catalog the vote reveal draws from
- CATEGORIES: marketing/engineering categories with their tags
- PROMPT_SUGGESTIONS: starter prompts shown on the landing screen
- RESPONSE_FRAGMENTS: the canned answer body both models replay

Nothing here mutates state. Functions that need randomness take a
RandomSource so results are reproducible under a fixed seed.
"""

from dataclasses import dataclass

from arena.errors import ApiErrorCode, NotFoundError
from arena.services.randomness import RandomSource
from arena.store import ModelInfo

MODELS: tuple[ModelInfo, ...] = (
    ModelInfo(id="gpt-4o", name="GPT-4o", provider="OpenAI"),
    ModelInfo(id="gpt-4-turbo", name="GPT-4 Turbo", provider="OpenAI"),
    ModelInfo(id="claude-3.5-sonnet", name="Claude 3.5 Sonnet", provider="Anthropic"),
    ModelInfo(id="claude-3-opus", name="Claude 3 Opus", provider="Anthropic"),
    ModelInfo(id="gemini-pro-1.5", name="Gemini Pro 1.5", provider="Google"),
    ModelInfo(id="gemini-ultra", name="Gemini Ultra", provider="Google"),
    ModelInfo(id="llama-3.1-70b", name="Llama 3.1 70B", provider="Meta"),
    ModelInfo(id="llama-3.1-405b", name="Llama 3.1 405B", provider="Meta"),
    ModelInfo(id="mistral-large", name="Mistral Large", provider="Mistral AI"),
    ModelInfo(id="command-r-plus", name="Command R+", provider="Cohere"),
)


@dataclass(frozen=True)
class Tag:
    id: str
    name: str
    slug: str
    usage_count: int
    description: str | None = None


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    slug: str
    description: str
    sort_order: int
    tags: tuple[Tag, ...]


@dataclass(frozen=True)
class PromptSuggestion:
    id: str
    title: str
    text: str
    category: str


CATEGORIES: tuple[Category, ...] = (
    Category(
        id="1",
        name="SEO",
        slug="seo",
        description="Search Engine Optimization",
        sort_order=1,
        tags=(
            Tag(id="1", name="Meta Descriptions", slug="meta-descriptions", usage_count=42),
            Tag(id="2", name="Title Tags", slug="title-tags", usage_count=38),
            Tag(id="3", name="Keywords Research", slug="keywords-research", usage_count=35),
            Tag(id="4", name="Content Optimization", slug="content-optimization", usage_count=31),
        ),
    ),
    Category(
        id="2",
        name="SMM",
        slug="smm",
        description="Social Media Marketing",
        sort_order=2,
        tags=(
            Tag(id="5", name="LinkedIn Posts", slug="linkedin-posts", usage_count=28),
            Tag(id="6", name="Instagram Captions", slug="instagram-captions", usage_count=26),
            Tag(id="7", name="Twitter Threads", slug="twitter-threads", usage_count=24),
            Tag(id="8", name="Social Strategy", slug="social-strategy", usage_count=22),
        ),
    ),
    Category(
        id="3",
        name="Content",
        slug="content",
        description="Content Marketing",
        sort_order=3,
        tags=(
            Tag(id="9", name="Blog Posts", slug="blog-posts", usage_count=45),
            Tag(id="10", name="Email Copy", slug="email-copy", usage_count=40),
            Tag(id="11", name="Landing Pages", slug="landing-pages", usage_count=38),
        ),
    ),
    Category(
        id="4",
        name="PPC",
        slug="ppc",
        description="Pay-Per-Click Advertising",
        sort_order=4,
        tags=(
            Tag(id="12", name="Ad Copy", slug="ad-copy", usage_count=33),
            Tag(id="13", name="Google Ads", slug="google-ads", usage_count=30),
            Tag(id="14", name="Facebook Ads", slug="facebook-ads", usage_count=28),
        ),
    ),
    Category(
        id="5",
        name="QWE",
        slug="qwe",
        description="Quick Web Engineering",
        sort_order=5,
        tags=(
            Tag(id="15", name="Frontend Development", slug="frontend-dev", usage_count=52),
            Tag(id="16", name="Backend APIs", slug="backend-apis", usage_count=48),
            Tag(id="17", name="Database Design", slug="database-design", usage_count=41),
            Tag(id="18", name="DevOps & Deployment", slug="devops-deployment", usage_count=36),
        ),
    ),
)

PROMPT_SUGGESTIONS: tuple[PromptSuggestion, ...] = (
    PromptSuggestion(
        "1",
        "SEO Blog Outline",
        "Create an SEO-optimized blog post outline about sustainable fashion trends for Q1 2025",
        "SEO",
    ),
    PromptSuggestion(
        "2",
        "Meta Description",
        "Write a compelling meta description (155 chars) for a landing page about "
        "AI-powered marketing tools",
        "SEO",
    ),
    PromptSuggestion(
        "3",
        "LinkedIn Post",
        "Draft an engaging LinkedIn post about the future of remote work in tech companies",
        "SMM",
    ),
    PromptSuggestion(
        "4",
        "Instagram Caption",
        "Create an Instagram caption for a product launch in the sustainable beauty niche",
        "SMM",
    ),
    PromptSuggestion(
        "5",
        "Email Subject Lines",
        "Generate 5 compelling email subject lines for a SaaS product announcement",
        "Content",
    ),
    PromptSuggestion(
        "6",
        "Landing Page Copy",
        "Write a persuasive hero section for a B2B marketing automation platform",
        "Content",
    ),
    PromptSuggestion(
        "7",
        "Google Ads Copy",
        "Create 3 variations of Google Ads copy (90 chars) for an e-commerce store "
        "selling eco-friendly products",
        "PPC",
    ),
    PromptSuggestion(
        "8",
        "Facebook Ad Headline",
        "Write 5 attention-grabbing Facebook ad headlines for a fitness app targeting "
        "busy professionals",
        "PPC",
    ),
    PromptSuggestion(
        "9",
        "React Component",
        "Create a reusable React component for a pagination control with TypeScript "
        "support and accessibility features",
        "QWE",
    ),
    PromptSuggestion(
        "10",
        "REST API Endpoint",
        "Design a RESTful API endpoint for user authentication with JWT tokens and "
        "refresh token rotation",
        "QWE",
    ),
    PromptSuggestion(
        "11",
        "Database Schema",
        "Create a PostgreSQL schema for an e-commerce platform with proper indexing "
        "and relationships",
        "QWE",
    ),
    PromptSuggestion(
        "12",
        "Docker Configuration",
        "Write a Dockerfile and docker-compose.yml for a Node.js microservice with "
        "MongoDB and Redis",
        "QWE",
    ),
)

RESPONSE_FRAGMENTS: tuple[str, ...] = (
    "Here's a comprehensive response to your marketing question. ",
    "Based on current best practices and industry trends, ",
    "I recommend the following strategic approach:\n\n",
    "1. **Research & Analysis**: Start by conducting thorough market research ",
    "and analyzing your target audience's behavior patterns.\n\n",
    "2. **Content Strategy**: Develop a content plan that aligns with ",
    "your audience's needs and search intent.\n\n",
    "3. **Optimization**: Apply SEO best practices including ",
    "keyword optimization, meta tags, and structured data.\n\n",
    "4. **Engagement**: Focus on creating engaging, valuable content ",
    "that resonates with your audience.\n\n",
    "5. **Measurement**: Track performance metrics and iterate ",
    "based on data-driven insights.\n\n",
    "This approach should help you achieve your marketing objectives ",
    "while maintaining authenticity and providing real value to your audience.",
)

MAX_SUGGESTIONS = 50
MAX_LEADERBOARD_ENTRIES = 100
PROVISIONAL_RANK_THRESHOLD = 6


def response_fragments(prompt: str) -> list[str]:
    """Return the fragment sequence both models replay for a prompt.

    The body is the same for every prompt; only the count and order of
    fragments matter to the stream protocol.
    """
    return list(RESPONSE_FRAGMENTS)


def pick_model_pair(random_source: RandomSource) -> tuple[ModelInfo, ModelInfo]:
    """Draw two distinct models without replacement."""
    model_a, model_b = random_source.sample(MODELS, 2)
    return model_a, model_b


def get_category(slug: str) -> Category:
    """Look up a category by slug.

    Raises:
        NotFoundError(E_CATEGORY_NOT_FOUND): If no category has that slug.
    """
    for category in CATEGORIES:
        if category.slug == slug:
            return category
    raise NotFoundError(ApiErrorCode.E_CATEGORY_NOT_FOUND, "Category not found")


def pick_category_tags(random_source: RandomSource) -> tuple[str, list[str]]:
    """Pick a random category slug and up to two of its tag slugs."""
    category = random_source.choice(CATEGORIES)
    tags = random_source.sample(category.tags, 2)
    return category.slug, [tag.slug for tag in tags]


def generate_leaderboard(category: str, random_source: RandomSource) -> list[dict]:
    """Build leaderboard rows for a category.

    Ranks, scores and rates follow catalog order; battle counts are noise.
    """
    entries = []
    for index, model in enumerate(MODELS):
        entries.append(
            {
                "model_id": model.id,
                "model_name": model.name,
                "provider": model.provider,
                "rank": index + 1,
                "score": 45 - index * 2.5,
                "wins": random_source.randrange(20, 70),
                "losses": random_source.randrange(5, 25),
                "ties": random_source.randrange(1, 11),
                "total_battles": random_source.randrange(40, 120),
                "win_rate": round(0.85 - index * 0.05, 2),
                "quality_score": round(0.95 - index * 0.03, 2),
                "is_provisional": index >= PROVISIONAL_RANK_THRESHOLD,
            }
        )
    return entries


def random_suggestions(limit: int, random_source: RandomSource) -> list[PromptSuggestion]:
    """Return up to `limit` suggestions in random order."""
    limit = max(0, min(limit, MAX_SUGGESTIONS))
    return random_source.shuffled(PROMPT_SUGGESTIONS)[:limit]
