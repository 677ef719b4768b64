from ruamel.yaml import YAML

def get_yaml_instance(round_trip: bool = True) -> YAML:
    """YAML handler for pipeline config files (round trip) and the stash index (safe)."""
    yaml = YAML(typ="rt" if round_trip else "safe")
    yaml.default_flow_style = False
    yaml.width = 4096
    yaml.indent(mapping=2, sequence=4, offset=2)
    if round_trip:
        yaml.preserve_quotes = True
    return yaml
