"""Network capability interface, web3 adapter and session registry."""
