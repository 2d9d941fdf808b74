import abc

import draccus


class HardwareConfig(draccus.ChoiceRegistry, abc.ABC):
    """Base class for hardware configurations.

    Any dataclass inheriting from this class can be registered with the
    ``@HardwareConfig.register_subclass("my_name")`` decorator and later
    instantiated from that short name via
    ``HardwareConfig.get_choice_class("my_name")``. ``build()`` returns the
    ready-to-use ``Hardware``.
    """

    @abc.abstractmethod
    def build(self):
        pass
