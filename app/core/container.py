from app.core.generator import TransactionGenerator
from app.core.settings import settings
from signing import get_key_provider


class Container:
    def __init__(self):
        self.key_provider = get_key_provider(settings)
        self.generator = TransactionGenerator(self.key_provider)


global_container = Container()
