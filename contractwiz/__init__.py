"""Arc Contract Wizard -- Solidity contract generation for Arc Testnet.

Turns a ``ContractConfiguration`` into deployable Solidity source, a gas
estimate, and a README deployment guide.

Quick usage::

    from contractwiz import ContractConfiguration, generate_contract

    config = ContractConfiguration(name="Alpha", symbol="ALP", max_supply=100)
    source = generate_contract(config)
"""

from contractwiz.gas import GasEstimate, estimate_gas_cost
from contractwiz.generator import generate_contract
from contractwiz.models import ContractConfiguration, ContractFamily
from contractwiz.reporter import render_readme

__all__ = [
    "ContractConfiguration",
    "ContractFamily",
    "GasEstimate",
    "estimate_gas_cost",
    "generate_contract",
    "render_readme",
]

__version__ = "0.3.0"
