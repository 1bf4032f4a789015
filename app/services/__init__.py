"""
Services Package for PickResults Backend.

This package handles the business logic and external service integrations, including:
- Sportradar game state client
- Outcome resolver for WINNER, SPREAD and TOTAL picks
- Pick store for sync reads and writes
- Sync orchestrator running one result-sync batch
"""
