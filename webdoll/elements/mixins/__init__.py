from webdoll.elements.mixins.find_elements_mixin import FindElementsMixin

__all__ = ['FindElementsMixin']
