"""Transaction categorization: merchant table, keyword rules, optional LLM fallback."""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from rupeeradar.adapters.base import LLMAdapter
from rupeeradar.config import settings
from rupeeradar.models.classification import CategoryPrediction
from rupeeradar.models.transaction import Transaction
from rupeeradar.services.prompts import PromptBuilder
from rupeeradar.utils.privacy import mask_digits

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Others"


@dataclass(frozen=True)
class Category:
    name: str
    keywords: Tuple[str, ...] = ()


# Checked in order; the first keyword hit wins.
CATEGORIES: Tuple[Category, ...] = (
    Category("Groceries", (
        "supermarket", "grocery", "market", "kirana", "bigbasket",
        "grofers", "fresh", "vegetables", "fruits", "dmart", "reliance fresh",
    )),
    Category("Food & Dining", (
        "restaurant", "cafe", "swiggy", "zomato", "food", "pizza", "hotel",
        "eat", "dining", "lunch", "dinner", "breakfast", "burger", "coffee",
        "tea", "bakery", "mcdonalds", "kfc", "dominos",
    )),
    Category("Transport", (
        "uber", "ola", "taxi", "auto", "metro", "train", "petrol", "fuel",
        "parking", "bus", "fare", "ticket", "transport", "rapido", "railway",
        "irctc", "flight", "redbus",
    )),
    Category("Shopping", (
        "amazon", "flipkart", "myntra", "mall", "retail", "shop", "purchase",
        "buy", "store", "market", "outlet", "fashion", "clothing", "shoes",
        "apparel", "electronics", "nykaa", "ajio",
    )),
    Category("Entertainment", (
        "movie", "netflix", "prime", "hotstar", "tickets", "bookmyshow", "cinema",
        "theater", "show", "concert", "game", "sports", "event", "subscription",
        "pvr", "inox",
    )),
    Category("Bills & Utilities", (
        "electricity", "water", "gas", "mobile", "phone", "internet", "broadband",
        "bill", "recharge", "dth", "utility", "wifi", "airtel", "jio", "vodafone",
        "idea", "bsnl", "tata", "rental", "maintenance",
    )),
    Category("Health", (
        "hospital", "clinic", "doctor", "medicine", "pharmacy", "medical", "health",
        "healthcare", "insurance", "consultation", "apollo", "medplus", "wellness",
        "netmeds", "pharmeasy", "lab", "test", "diagnosis",
    )),
    Category("Education", (
        "school", "college", "course", "class", "tuition", "books", "education",
        "learning", "training", "fee", "university", "institute", "academy",
        "online course", "udemy", "coursera",
    )),
    Category("Personal Care", (
        "salon", "spa", "haircut", "parlour", "beauty", "cosmetics", "grooming",
        "makeup", "skincare", "barber", "massage", "facial", "manicure", "pedicure",
    )),
    Category("Home", (
        "rent", "maintenance", "furniture", "appliance", "decor", "repair", "housing",
        "property", "interior", "renovation", "plumbing", "electrical", "carpet", "curtain",
    )),
    Category("Travel", (
        "flight", "hotel", "booking", "trip", "vacation", "holiday", "travel", "tour",
        "resort", "makemytrip", "goibibo", "oyo", "airbnb", "cleartrip", "yatra",
        "visa", "passport", "cruise",
    )),
    Category("Investment", (
        "mutual", "fund", "stock", "investment", "deposit", "gold", "fixed", "recurring",
        "shares", "bonds", "dividend", "interest", "zerodha", "groww", "upstox", "ipo",
    )),
    Category("Income", ("salary", "payroll", "freelance")),
    Category(DEFAULT_CATEGORY),
)

KNOWN_MERCHANTS = {
    "amazon": "Shopping",
    "flipkart": "Shopping",
    "swiggy": "Food & Dining",
    "zomato": "Food & Dining",
    "uber": "Transport",
    "ola": "Transport",
    "netflix": "Entertainment",
    "hotstar": "Entertainment",
    "airtel": "Bills & Utilities",
    "jio": "Bills & Utilities",
    "apollo": "Health",
    "medplus": "Health",
    "bookmyshow": "Entertainment",
    "makemytrip": "Travel",
    "irctc": "Transport",
}

CATEGORY_NAMES = tuple(category.name for category in CATEGORIES)


def get_category_by_name(name: str) -> Optional[Category]:
    for category in CATEGORIES:
        if category.name.lower() == (name or "").lower():
            return category
    return None


def find_merchant_category(description: str) -> Optional[str]:
    """Category of the first known merchant named in the description."""
    desc = (description or "").lower()
    for merchant, category in KNOWN_MERCHANTS.items():
        if merchant in desc:
            return category
    return None


def categorize_sync(description: str) -> str:
    """Rule-based category: merchant table, then keywords, then Others."""
    if not description:
        return DEFAULT_CATEGORY

    merchant_category = find_merchant_category(description)
    if merchant_category:
        return merchant_category

    desc = description.lower()
    for category in CATEGORIES:
        if any(keyword in desc for keyword in category.keywords):
            return category.name

    return DEFAULT_CATEGORY


class CategoryEngine:
    """Assigns categories to transactions, asking an LLM only when rules fail."""

    def __init__(
        self,
        adapter: Optional[LLMAdapter] = None,
        confidence_threshold: Optional[float] = None,
    ):
        self.adapter = adapter
        self.confidence_threshold = (
            settings.category_confidence_threshold
            if confidence_threshold is None
            else confidence_threshold
        )
        self.prompt_builder = PromptBuilder()

    async def predict(self, description: str, amount: float) -> CategoryPrediction:
        """Ask the adapter for a category; failures return the fallback value."""
        if self.adapter is None:
            return CategoryPrediction.fallback("No LLM adapter configured")

        prompt = self.prompt_builder.build_category_prompt(description, amount, CATEGORY_NAMES)
        try:
            prediction = await self.adapter.predict_category(prompt)
        except Exception as e:
            logger.error("AI categorization failed for %r: %s", mask_digits(description), e)
            return CategoryPrediction.fallback(str(e))

        category = get_category_by_name(prediction.category)
        if category is None:
            logger.info("AI suggested unknown category %r", prediction.category)
            return CategoryPrediction.fallback(f"Unknown category {prediction.category!r}")

        return CategoryPrediction(category=category.name, confidence=prediction.confidence)

    async def categorize(self, description: str, amount: Optional[float] = None) -> str:
        """
        Categorize a transaction description.

        Args:
            description: Transaction description
            amount: Transaction amount; the LLM fallback is only used when given

        Returns:
            Category name, "Others" when nothing matched
        """
        category = categorize_sync(description)
        if category != DEFAULT_CATEGORY or amount is None or self.adapter is None:
            return category

        prediction = await self.predict(description, amount)
        if not prediction.failed and prediction.confidence > self.confidence_threshold:
            return prediction.category
        return DEFAULT_CATEGORY

    async def categorize_transaction(self, tx: Transaction) -> Transaction:
        category = await self.categorize(tx.description, tx.amount)
        return tx.with_category(category)
