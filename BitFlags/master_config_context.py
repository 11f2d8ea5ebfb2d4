class MasterConfigContext:
    """
    Temporarily replace the `config` class attribute of one or more classes.

        with MasterConfigContext({FlagsManager: Config(MAX_FLAG_BITS=8)}):
            FlagsManager(names)  # validated against 8 bits

    The original configurations are restored on exit, including when the
    block raises.
    """

    def __init__(self, configs):
        self.original_configs = {}
        self.new_configs = dict(configs)

    def __enter__(self):
        for cls, new_config in self.new_configs.items():
            self.original_configs[cls] = cls.config
            cls.config = new_config
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        for cls, original_config in self.original_configs.items():
            cls.config = original_config
        self.original_configs = {}
