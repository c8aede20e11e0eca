from enum import Enum


class ProjectStatus(str, Enum):
    ACTIVE = "Active"
    IDEA = "Idea"
    DONE = "Done"


class AssetType(str, Enum):
    STOCK = "stock"
    CRYPTO = "crypto"
    FOREX = "forex"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class TradeType(str, Enum):
    BUY = "Buy"
    SELL = "Sell"


class TradeEmotion(str, Enum):
    EXCITED = "Excited"
    FEARFUL = "Fearful"
    NEUTRAL = "Neutral"
    REVENGE = "Revenge"


class NewsDataSource(str, Enum):
    REAL = "real"
    DEMO = "demo"
    MOCK = "mock"


class KnowledgeCategory(str, Enum):
    SWIFT = "Swift"
    PYTHON = "Python"
    AI = "AI/ML"
    DEVOPS = "DevOps"
    WEB = "Web"
    DATABASE = "Database"
