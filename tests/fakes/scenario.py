# =============================================================================
# File: tests/fakes/scenario.py
# Description: Ids shared by the fixtures in tests/conftest.py
# =============================================================================

PROJECT_ID = 10
OTHER_PROJECT_ID = 20

ALICE, BOB, CAROL, DAVE, EVE = 1, 2, 3, 4, 5
