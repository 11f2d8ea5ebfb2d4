import yaml


class YamlDumper:
    @staticmethod
    def to_yaml_compatible_str(obj):
        """Convert an object to a block-style YAML string, keeping key order."""
        try:
            return yaml.safe_dump(obj, default_flow_style=False, sort_keys=False)
        except yaml.YAMLError:
            return str(obj)
