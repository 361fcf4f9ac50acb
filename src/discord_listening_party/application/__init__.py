"""
Application Layer

Contains use cases and the command dispatcher. This layer orchestrates
domain rules and infrastructure ports to fulfil each party action.

Structure:
- commands/: The closed set of party commands, response intents and the dispatcher
- services/: One application service per state-machine component
- interfaces/: Port interfaces for infrastructure adapters
"""
