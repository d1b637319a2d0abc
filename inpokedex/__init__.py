"""InPokeDex: a localized PokeAPI relay and its infinite-scroll feed client."""

__version__ = "0.1.0"
