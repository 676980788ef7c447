"""First-run onboarding flag."""

from __future__ import annotations

from ..models import OnboardingState
from .store import ONBOARDING, CollectionStore

ONBOARDING_STEPS = 3


class OnboardingRepository:
    def __init__(self, store: CollectionStore) -> None:
        self._store = store

    def get(self) -> OnboardingState:
        data = self._store.get(ONBOARDING)
        if data is None:
            return OnboardingState()
        return OnboardingState.from_dict(data)

    def complete(self) -> OnboardingState:
        state = OnboardingState(completed=True, current_step=ONBOARDING_STEPS)
        self._store.set(ONBOARDING, state.to_dict())
        return state

    def reset(self) -> OnboardingState:
        state = OnboardingState()
        self._store.set(ONBOARDING, state.to_dict())
        return state
