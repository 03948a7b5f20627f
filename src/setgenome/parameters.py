"""
Parameters Module

This module implements the configuration of a SET genome run: the structure
of the genomes (inputs, outputs, initial connectivity, weight distribution)
and the list of mutations applied every generation. Parameters are read from
an INI configuration file.

Classes:
    Structure:  Input/output layout and weight distribution of the genomes
    Parameters: Seed, structure and mutation list of a run
"""

import configparser
import logging
import math
import os

from setgenome.activations import Activation
from setgenome.mutations   import (Mutation,
                                   ChangeWeights,
                                   ChangeActivation,
                                   AddNode,
                                   AddConnection,
                                   AddRecurrentConnection)

logger = logging.getLogger(__name__)

class Structure:
    """
    Describes the layout shared by all genomes of a run.

    Public Attributes:
        number_of_inputs:            Number of input nodes
        number_of_outputs:           Number of output nodes
        percent_of_connected_inputs: Share of inputs connected to every output by 'Genome.init()'
        outputs_activation:          Activation function of the output nodes
        weight_std_dev:              Standard deviation of the weight perturbation
        weight_cap:                  Weights are constrained to [-weight_cap, weight_cap]
        weight_resolution:           Number of bits encoding each connection weight (None for plain weights)
        seed:                        Seed of the run's random number generator
    """

    def __init__(self,
                 number_of_inputs           : int                = 1,
                 number_of_outputs          : int                = 1,
                 percent_of_connected_inputs: float              = 1.0,
                 outputs_activation         : Activation | str   = Activation.TANH,
                 weight_std_dev             : float              = 0.1,
                 weight_cap                 : float              = 1.0,
                 seed                       : int | None         = 42,
                 weight_resolution          : int | None         = None):

        if number_of_inputs < 0 or number_of_outputs < 0:
            raise ValueError("the number of inputs and outputs must be non-negative")
        if not 0.0 <= percent_of_connected_inputs <= 1.0:
            raise ValueError(f"percent_of_connected_inputs must be in [0, 1], got {percent_of_connected_inputs}")
        if not math.isfinite(weight_std_dev) or weight_std_dev < 0:
            raise ValueError(f"weight_std_dev must be finite and non-negative, got {weight_std_dev}")
        if not math.isfinite(weight_cap) or weight_cap <= 0:
            raise ValueError(f"weight_cap must be finite and positive, got {weight_cap}")
        if weight_resolution is not None and weight_resolution < 1:
            raise ValueError(f"weight_resolution must be at least 1, got {weight_resolution}")

        self.number_of_inputs            = number_of_inputs
        self.number_of_outputs           = number_of_outputs
        self.percent_of_connected_inputs = percent_of_connected_inputs
        self.outputs_activation          = Activation.parse(outputs_activation)
        self.weight_std_dev              = weight_std_dev
        self.weight_cap                  = weight_cap
        self.seed                        = seed
        self.weight_resolution           = weight_resolution

    @classmethod
    def basic(cls, number_of_inputs: int, number_of_outputs: int) -> 'Structure':
        return cls(number_of_inputs, number_of_outputs)

    def __eq__(self, other):
        if not isinstance(other, Structure):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self):
        return (f"Structure(number_of_inputs={self.number_of_inputs}, "
                f"number_of_outputs={self.number_of_outputs}, "
                f"percent_of_connected_inputs={self.percent_of_connected_inputs}, "
                f"outputs_activation={self.outputs_activation.value!r}, "
                f"weight_std_dev={self.weight_std_dev}, weight_cap={self.weight_cap}, seed={self.seed}, "
                f"weight_resolution={self.weight_resolution})")

class Parameters:
    """
    All parameters of a run: the genome structure and the mutation list.

    Without a configuration file the defaults are used. A configuration file
    looks like:

        [GENERAL]
        seed = 42

        [STRUCTURE]
        number_of_inputs            = 3
        number_of_outputs           = 1
        percent_of_connected_inputs = 1.0
        outputs_activation          = tanh
        weight_std_dev              = 0.1
        weight_cap                  = 1.0
        weight_resolution           = None

        [MUTATION weights]
        type               = change_weights
        chance             = 1.0
        percent_perturbed  = 0.5

        [MUTATION new nodes]
        type            = add_node
        chance          = 0.01
        activation_pool = tanh, relu, sigmoid

    Mutation sections are applied in the order they appear in the file; a
    mutation type may appear in several sections.

    Public Attributes:
        structure: The Structure of the run's genomes
        mutations: The ordered mutation list
    """

    MUTATION_SECTION_PREFIX = 'MUTATION'

    @staticmethod
    def default_mutations() -> list[Mutation]:
        return [ChangeWeights(chance=1.0, percent_perturbed=0.5),
                ChangeActivation(chance=0.05, activation_pool=tuple(Activation.all())),
                AddNode(chance=0.005, activation_pool=tuple(Activation.all())),
                AddConnection(chance=0.1),
                AddRecurrentConnection(chance=0.01)]

    @staticmethod
    def _parse_activation_pool(raw_pool: str) -> tuple[Activation, ...]:
        """
        Parse an activation pool from a comma-separated list of names, or "all".

        Raises:
            ValueError: if a name is not a valid activation function
        """
        if raw_pool.strip().lower() == 'all':
            return tuple(Activation.all())
        return tuple(Activation.parse(name) for name in raw_pool.split(',') if name.strip())

    def __init__(self, config_file: str | None = None):
        """
        Initialize Parameters by parsing an INI file, or with the default values.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, the default parameters are used.

        Raises:
            FileNotFoundError: if 'config_file' does not exist
            ValueError:        if a value is invalid
        """

        # Default parameters
        if config_file is None:
            self.structure = Structure()
            self.mutations = self.default_mutations()
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        logger.debug("Loading parameters from %s", config_file)
        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [GENERAL]

        # Seed of the random number generator; "None" draws fresh entropy.
        seed = get_value('GENERAL', 'seed', int, default=42)

        # [STRUCTURE]

        self.structure = Structure(

            # The number of input nodes, through which the network receives inputs.
            number_of_inputs = get_value('STRUCTURE', 'number_of_inputs', int),

            # The number of output nodes, to which the network delivers outputs.
            number_of_outputs = get_value('STRUCTURE', 'number_of_outputs', int),

            # The share of input nodes connected to every output node
            # when a genome is initialized (at least one if non-zero).
            percent_of_connected_inputs = get_value('STRUCTURE', 'percent_of_connected_inputs', float, default=1.0),

            # The activation function of the output nodes.
            outputs_activation = get_value('STRUCTURE', 'outputs_activation', str, default='tanh'),

            # The standard deviation of the Gaussian distribution
            # new and perturbed connection weights are drawn from.
            weight_std_dev = get_value('STRUCTURE', 'weight_std_dev', float, default=0.1),

            # Connection weights are constrained to [-weight_cap, weight_cap].
            weight_cap = get_value('STRUCTURE', 'weight_cap', float, default=1.0),

            # The number of bits encoding each connection weight; "None" keeps plain weights.
            weight_resolution = get_value('STRUCTURE', 'weight_resolution', int, default=None),

            seed = seed)

        # [MUTATION ...]

        self.mutations = []
        for section in parser.sections():
            if section.split(maxsplit=1)[:1] != [self.MUTATION_SECTION_PREFIX]:
                continue

            mutation_dict = {'type'  : get_value(section, 'type',   str),
                             'chance': get_value(section, 'chance', float)}

            if parser.has_option(section, 'percent_perturbed'):
                mutation_dict['percent_perturbed'] = get_value(section, 'percent_perturbed', float)
            if parser.has_option(section, 'standard_deviation'):
                mutation_dict['standard_deviation'] = get_value(section, 'standard_deviation', float)
            if parser.has_option(section, 'mutation_rate'):
                mutation_dict['mutation_rate'] = get_value(section, 'mutation_rate', float)
            if parser.has_option(section, 'duplication_rate'):
                mutation_dict['duplication_rate'] = get_value(section, 'duplication_rate', float)
            if parser.has_option(section, 'activation_pool'):
                mutation_dict['activation_pool'] = self._parse_activation_pool(
                    get_value(section, 'activation_pool', str))

            try:
                self.mutations.append(Mutation.from_dict(mutation_dict))
            except TypeError as error:
                raise ValueError(f"Invalid options in section [{section}]: {error}") from None

        logger.debug("Loaded %d mutations from %s", len(self.mutations), config_file)

    @classmethod
    def basic(cls, number_of_inputs: int, number_of_outputs: int) -> 'Parameters':
        """Default parameters for a network with the given number of inputs and outputs."""
        parameters = cls()
        parameters.structure = Structure.basic(number_of_inputs, number_of_outputs)
        return parameters

    def __repr__(self):
        return f"Parameters(structure={self.structure!r}, mutations={self.mutations!r})"
