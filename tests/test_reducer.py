"""reducer 规则测试。"""
import pytest
from pydantic import ValidationError

from pet_house.game.actions import (
    EndMinigame,
    Feed,
    GuessHidingSpot,
    Navigate,
    PetMoved,
    PlayWithPet,
    StartMinigame,
    UpdateRoomLook,
    parse_action,
)
from pet_house.game.models import (
    GameState,
    HideAndSeekObject,
    MinigameStatus,
    PetState,
    PlayerState,
    RoomName,
    initial_game_state,
)
from pet_house.game.reducer import can_feed, can_play, game_reducer


def _state(view: str, pet: str) -> GameState:
    return initial_game_state().model_copy(
        update={"player": PlayerState(current_view=view), "pet": PetState(current_room=pet)}
    )


def _playing() -> GameState:
    state = game_reducer(_state("Living Room", "Living Room"), PlayWithPet())
    return game_reducer(state, StartMinigame())


def test_navigate_only_changes_view() -> None:
    state = _state("Kitchen", "Bedroom")
    after = game_reducer(state, Navigate(room=RoomName.LIVING_ROOM))
    assert after.player.current_view == "Living Room"
    assert after.pet.current_room == "Bedroom"
    assert after.house == state.house


def test_pet_moved_only_changes_pet() -> None:
    state = _state("Kitchen", "Bedroom")
    after = game_reducer(state, PetMoved(room="Kitchen"))
    assert after.pet.current_room == RoomName.KITCHEN
    assert after.player.current_view == "Kitchen"


def test_feed_never_changes_state() -> None:
    eligible = _state("Kitchen", "Kitchen")
    assert can_feed(eligible)
    assert game_reducer(eligible, Feed()) is eligible

    ineligible = _state("Bedroom", "Kitchen")
    assert not can_feed(ineligible)
    assert game_reducer(ineligible, Feed()) is ineligible


def test_play_requires_both_in_living_room() -> None:
    for view, pet in [("Kitchen", "Living Room"), ("Living Room", "Bedroom"), ("Bedroom", "Bedroom")]:
        state = _state(view, pet)
        assert not can_play(state)
        assert game_reducer(state, PlayWithPet()) is state


def test_play_creates_idle_session_behind_couch() -> None:
    state = game_reducer(_state("Living Room", "Living Room"), PlayWithPet())
    assert state.minigame is not None
    assert state.minigame.hiding_spot == HideAndSeekObject.COUCH
    assert state.minigame.status == MinigameStatus.IDLE
    assert state.minigame.message == ""


def test_start_without_session_is_noop() -> None:
    state = initial_game_state()
    assert game_reducer(state, StartMinigame()) is state


def test_start_sets_playing_message() -> None:
    state = _playing()
    assert state.minigame.status == MinigameStatus.PLAYING
    assert state.minigame.message == "Where did I hide?"


def test_guess_without_session_is_noop() -> None:
    state = initial_game_state()
    assert game_reducer(state, GuessHidingSpot(guess="Couch")) is state


def test_repeated_wrong_guesses_keep_playing() -> None:
    state = _playing()
    for guess in ["Lamp", "Rug", "Lamp", "Rug", "Lamp"]:
        state = game_reducer(state, GuessHidingSpot(guess=guess))
        assert state.minigame.status == MinigameStatus.PLAYING
        assert state.minigame.message == "Try again!"
        assert state.minigame.hiding_spot == HideAndSeekObject.COUCH


def test_correct_guess_after_misses_is_found() -> None:
    state = _playing()
    for _ in range(3):
        state = game_reducer(state, GuessHidingSpot(guess=HideAndSeekObject.RUG))
    state = game_reducer(state, GuessHidingSpot(guess=HideAndSeekObject.COUCH))
    assert state.minigame.status == MinigameStatus.FOUND
    assert state.minigame.message == "You found me!"
    assert state.minigame.hiding_spot == HideAndSeekObject.COUCH


def test_end_minigame_clears_session() -> None:
    state = game_reducer(_playing(), EndMinigame())
    assert state.minigame is None
    # 没有进行中的游戏时结束也是安全的
    assert game_reducer(state, EndMinigame()).minigame is None


def test_update_room_look_touches_only_that_room() -> None:
    state = initial_game_state()
    after = game_reducer(state, UpdateRoomLook(room="Kitchen", background_image="data:image/png;base64,AAAA"))
    assert after.background_of("Kitchen") == "data:image/png;base64,AAAA"
    assert after.house.rooms["Living Room"] == state.house.rooms["Living Room"]
    assert after.house.rooms["Bedroom"] == state.house.rooms["Bedroom"]
    assert state.background_of("Kitchen") == "/assets/empty.png"


def test_unknown_action_returns_input() -> None:
    state = initial_game_state()
    assert game_reducer(state, object()) is state
    assert game_reducer(state, {"type": "NAVIGATE", "room": "Kitchen"}) is state


def test_reducer_is_deterministic_and_does_not_mutate_input() -> None:
    state = _state("Living Room", "Living Room")
    before = state.to_document()
    first = game_reducer(state, PlayWithPet())
    second = game_reducer(state, PlayWithPet())
    assert first == second
    assert state.to_document() == before
    assert state.minigame is None


def test_feed_then_navigate_scenario() -> None:
    state = _state("Kitchen", "Kitchen")
    fed = game_reducer(state, Feed())
    assert fed == state
    moved = game_reducer(fed, Navigate(room="Living Room"))
    assert moved.player.current_view == "Living Room"
    assert moved.pet.current_room == "Kitchen"


def test_parse_action_from_dict() -> None:
    action = parse_action({"type": "NAVIGATE", "room": "Bedroom"})
    assert isinstance(action, Navigate)
    assert action.room == RoomName.BEDROOM
    guess = parse_action({"type": "GUESS_HIDING_SPOT", "guess": "Lamp"})
    assert isinstance(guess, GuessHidingSpot)
    assert isinstance(parse_action({"type": "FEED"}), Feed)


def test_parse_action_rejects_bad_input() -> None:
    with pytest.raises(ValidationError):
        parse_action({"type": "NAVIGATE", "room": "Garage"})
    with pytest.raises(ValidationError):
        parse_action({"type": "DANCE"})
    with pytest.raises(ValidationError):
        parse_action({"type": "UPDATE_ROOM_LOOK", "room": "Kitchen", "background_image": ""})


def test_parse_action_accepts_camel_case_room_look() -> None:
    action = parse_action(
        {"type": "UPDATE_ROOM_LOOK", "room": "Kitchen", "backgroundImage": "data:image/png;base64,QQ=="}
    )
    assert isinstance(action, UpdateRoomLook)
    assert action.background_image == "data:image/png;base64,QQ=="
    state = game_reducer(initial_game_state(), action)
    assert state.background_of("Kitchen") == "data:image/png;base64,QQ=="
