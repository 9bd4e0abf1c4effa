"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of DIG -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

import logging
from dataclasses import dataclass
from random import Random
from typing import Optional, Self

from src.core.exceptions import (
    BoneNotFoundError,
    BoneNotInHandError,
    GameModelError,
    GameNotInProgressError,
    GameSetupError,
    HandFullError,
    InvalidMoveError,
    NoActionsLeftError,
    NoBoneAtPositionError,
    NoBonesOfColorError,
    NoMatchingBowlError,
    NotYourTurnError,
    PlayerNotFoundError,
)
from src.core.models import GameModel
from src.core.shared_types import PUT_BACK, BoneColor, CardType, Status
from src.dig.bones import (
    Bone,
    Bowl,
    create_bones,
    create_bowls,
    new_id,
    shuffle_track,
)
from src.dig.players import Player
from src.dig.scoring import BowlValues, bowl_values, player_scores
from src.dig.track import Card, Track

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 4
MAX_ACTIONS_PER_TURN = 3
MAX_HAND_SIZE = 3
# Every bone in hand costs one space of movement.
MAX_MOVE_DISTANCE = 4


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    player_count: int
    status: Status
    current_turn: int
    actions_this_turn: int
    players: list[Player]
    bones: dict[str, Bone]
    bowls: dict[str, Bowl]
    track: Track

    @classmethod
    def new_game(
        cls,
        player_count: int,
        player_names: list[str],
        player_icons: list[str],
        rng: Optional[Random] = None,
    ) -> Self:
        """
        Set up a fresh game: deal the bones, shuffle the yard and put everybody on the doghouse.
        ----

        The game goes straight from `waiting` to `playing` once the yard has been laid out.
        """
        _validate_setup(player_count, player_names, player_icons)
        rng = rng or Random()

        bones = create_bones(rng)
        bowls = create_bowls()
        track = shuffle_track(bones, bowls, rng)
        doghouse = track.doghouse()

        players = [
            Player(
                id=new_id(),
                name=name,
                icon=icon,
                order=order,
                yard_position=doghouse.position,
            )
            for order, (name, icon) in enumerate(zip(player_names, player_icons))
        ]
        game = cls(
            player_count=player_count,
            status=Status.WAITING,
            current_turn=0,
            actions_this_turn=0,
            players=players,
            bones={bone.id: bone for bone in bones},
            bowls={bowl.id: bowl for bowl in bowls},
            track=track,
        )
        game._change_status(Status.PLAYING)
        logger.info(
            "New game for %s: %d bones, %d bowls, %d cards on the track",
            ", ".join(player_names),
            len(bones),
            len(bowls),
            len(track),
        )
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in Status.__members__.values():
            raise GameModelError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            )

        try:
            players = sorted(
                (Player.from_record(record) for record in model.players),
                key=lambda player: player.order,
            )
            bones = [Bone.from_record(record) for record in model.bones]
            bowls = [Bowl.from_record(record) for record in model.bowls]
            cards = [Card.from_record(record) for record in model.yard_cards]
        except (KeyError, TypeError, ValueError) as error:
            raise GameModelError(f"Cannot rebuild game from stored data: {error}") from error

        return cls(
            player_count=model.player_count,
            status=Status(model.status),
            current_turn=model.current_turn,
            actions_this_turn=model.actions_this_turn,
            players=players,
            bones={bone.id: bone for bone in bones},
            bowls={bowl.id: bowl for bowl in bowls},
            track=Track.from_cards(cards),
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            player_count=self.player_count,
            status=self.status.value,
            current_turn=self.current_turn,
            actions_this_turn=self.actions_this_turn,
            players=[player.to_record() for player in self.players],
            bones=[bone.to_record() for bone in self.bones.values()],
            bowls=[bowl.to_record() for bowl in self.bowls.values()],
            yard_cards=[card.to_record() for card in self.track.sorted_cards()],
        )

    # --- READ-ONLY VIEWS ---
    @property
    def current_player(self) -> Player:
        return self.players[self.current_turn]

    @property
    def bones_in_yard(self) -> int:
        return len(self.track.bone_cards())

    def player(self, player_id: str) -> Player:
        player = next((p for p in self.players if p.id == player_id), None)
        if player is None:
            raise PlayerNotFoundError(f"Player {player_id!r} is not part of this game.")
        return player

    def hand(self, player_id: str) -> list[Bone]:
        return [bone for bone in self.bones.values() if bone.holder_id == player_id]

    def bowl_values(self) -> BowlValues:
        return bowl_values(self.track)

    def scores(self) -> dict[str, int]:
        """Current score per player id. Recomputed from the current position of the bowls."""
        return player_scores(
            [player.id for player in self.players],
            self.bones.values(),
            self.bowl_values(),
        )

    def winner_ids(self) -> list[str]:
        """Only known once the game is finished. A tie gives multiple winners."""
        if self.status != Status.FINISHED:
            return []
        scores = self.scores()
        best = max(scores.values(), default=0)
        return [player.id for player in self.players if scores[player.id] == best]

    # --- ACTIONS ---
    def move(self, player_id: str, spaces: int) -> None:
        """
        Walk along the track.
        ----

        1. |spaces| between 1 and 4, and never more than 4 minus the number of bones in your hand
        2. counted in cards (visual index), not in positions: gaps left by digging are skipped
        3. negative spaces walk away from the doghouse
        4. you stop at either end of the track instead of falling off
        """
        player = self._start_action(player_id)

        distance = abs(spaces)
        if not 1 <= distance <= MAX_MOVE_DISTANCE:
            raise InvalidMoveError(
                f"Can move 1-{MAX_MOVE_DISTANCE} spaces, not {spaces}."
            )
        bones_in_hand = len(self.hand(player.id))
        max_distance = MAX_MOVE_DISTANCE - bones_in_hand
        if distance > max_distance:
            raise InvalidMoveError(
                f"Can only move {max_distance} spaces with {bones_in_hand} bones in hand."
            )

        current_index = self.track.visual_index(player.yard_position)
        last_index = len(self.track) - 1
        new_index = max(0, min(current_index + spaces, last_index))
        player.yard_position = self.track.card_at_visual_index(new_index).position
        logger.debug("%s moved %d to position %d", player.name, spaces, player.yard_position)

        self._complete_action()

    def dig(self, player_id: str, replacement_bone_id: Optional[str] = None) -> None:
        """
        Dig up the bone you are standing on. The bone gets revealed, whatever happens next.
        ----

        **three outcomes, picked by the caller**

        1. `PUT_BACK`: leave the bone where it is (now face up). Nothing moves.
        2. id of a bone in your hand: swap. The dug bone goes into your hand, the other one takes its place on the track.
        3. nothing: take the bone. The hole gets filled by the leftmost card of the track (leapfrog).

        Afterwards, anybody left without a card under their feet is moved to the nearest card.
        """
        player = self._start_action(player_id)

        hand = self.hand(player.id)
        if len(hand) >= MAX_HAND_SIZE:
            raise HandFullError(f"Cannot hold more than {MAX_HAND_SIZE} bones.")

        bone_card = self.track.bone_card_at(player.yard_position)
        if bone_card is None:
            raise NoBoneAtPositionError(
                f"No bone at current position {player.yard_position}."
            )
        bone = self.bones.get(bone_card.bone_id or "")
        if bone is None:
            raise BoneNotFoundError(
                f"Card {bone_card.id} at position {bone_card.position} does not hold a known bone."
            )

        replacement: Optional[Bone] = None
        if replacement_bone_id and replacement_bone_id != PUT_BACK:
            replacement = self._bone_in_hand(hand, replacement_bone_id)

        # --- all checks passed, from here on the state changes ---
        bone.reveal()

        if replacement_bone_id == PUT_BACK:
            logger.debug("%s put back a %s bone", player.name, bone.color)
        else:
            dig_position = bone_card.position
            self.track.remove(bone_card)
            bone.pick_up(player.id)

            if replacement is not None:
                self._place_bone(replacement, dig_position)
                logger.debug(
                    "%s swapped a %s bone for a %s bone",
                    player.name,
                    bone.color,
                    replacement.color,
                )
            else:
                self._leapfrog(dig_position)
                logger.debug("%s dug up a %s bone", player.name, bone.color)

            self._recover_stranded_players()

        self._complete_action()

    def drop(self, player_id: str, bone_id: str) -> None:
        """Bury one bone from your hand in the bowl of its own color you are standing on."""
        player = self._start_action(player_id)

        bone = self._bone_in_hand(self.hand(player.id), bone_id)
        self._assert_matching_bowl(player, bone.color)

        bone.bury(player.id)
        logger.debug("%s buried a %s bone", player.name, bone.color)

        self._complete_action()

    def drop_all(self, player_id: str, color: BoneColor) -> None:
        """Bury every bone of one color from your hand. Still counts as a single action."""
        player = self._start_action(player_id)

        to_drop = [bone for bone in self.hand(player.id) if bone.color == color]
        if not to_drop:
            raise NoBonesOfColorError(f"No {color} bones in hand.")
        self._assert_matching_bowl(player, color)

        for bone in to_drop:
            bone.bury(player.id)
        logger.debug("%s buried %d %s bones", player.name, len(to_drop), color)

        self._complete_action()

    def end_turn(self) -> None:
        """
        Hand over to the next player, or end the game.
        ----

        The game is over once there are no bone cards left in the yard. Bones still in somebody's hand at that
        point were never buried and do not count.
        """
        self._assert_in_progress()

        if self.bones_in_yard == 0:
            self._finish()
            return

        self.current_turn = (self.current_turn + 1) % self.player_count
        self.actions_this_turn = 0
        logger.info("Turn passes to %s", self.current_player.name)

    # -- PRIVATE HELPERS ---
    def _assert_in_progress(self) -> None:
        if self.status != Status.PLAYING:
            raise GameNotInProgressError(f"Game is not in progress. status: {self.status}")

    def _assert_your_turn(self, player: Player) -> None:
        turn_player = self.current_player
        if player.id != turn_player.id:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {turn_player.name} to finish their turn first."
            )

    def _assert_actions_left(self) -> None:
        if self.actions_this_turn >= MAX_ACTIONS_PER_TURN:
            raise NoActionsLeftError(
                f"Maximum {MAX_ACTIONS_PER_TURN} actions per turn."
            )

    def _start_action(self, player_id: str) -> Player:
        """Checks shared by every action. Returns the acting player."""
        self._assert_in_progress()
        player = self.player(player_id)
        self._assert_your_turn(player)
        self._assert_actions_left()
        return player

    def _complete_action(self) -> None:
        """Count the action. The third one ends the turn right away."""
        self.actions_this_turn += 1
        if self.actions_this_turn >= MAX_ACTIONS_PER_TURN:
            self.end_turn()

    def _bone_in_hand(self, hand: list[Bone], bone_id: str) -> Bone:
        bone = next((b for b in hand if b.id == bone_id), None)
        if bone is None:
            raise BoneNotInHandError(f"Bone {bone_id!r} is not in your hand.")
        return bone

    def _assert_matching_bowl(self, player: Player, color: BoneColor) -> None:
        if self.track.bowl_card_at(player.yard_position, color) is None:
            raise NoMatchingBowlError(
                f"No {color} bowl at current position {player.yard_position}."
            )

    def _place_bone(self, bone: Bone, position: int) -> None:
        """Put a bone from a hand back into the yard, on a new card."""
        self.track.insert(
            Card(
                id=new_id(),
                type=CardType.BONE,
                position=position,
                color=bone.color,
                bone_id=bone.id,
            )
        )
        bone.place(position)

    def _relocate_card(self, card: Card, position: int) -> None:
        self.track.relocate(card, position)
        if card.bone_id is not None:
            self.bones[card.bone_id].place(position)
        if card.bowl_id is not None:
            self.bowls[card.bowl_id].position = position

    def _leapfrog(self, hole: int) -> None:
        """
        Fill the hole with the leftmost card of the track (only if that card lies before the hole).
        ----

        Cards flow towards the doghouse this way without reshuffling the whole yard.
        Players that were standing on the leftmost card go to whatever is the leftmost card afterwards.
        """
        leftmost = self.track.leftmost_before(hole)
        if leftmost is None:
            return

        riders = [p for p in self.players if p.yard_position == leftmost.position]
        self._relocate_card(leftmost, hole)

        if not riders:
            return
        new_leftmost = self.track.leftmost_before(hole, exclude=leftmost)
        if new_leftmost is None:
            # Nothing left before the hole: stranding recovery picks them up.
            return
        for rider in riders:
            rider.yard_position = new_leftmost.position

    def _recover_stranded_players(self) -> None:
        """Anybody whose card disappeared goes to the nearest remaining card."""
        for player in self.players:
            if self.track.card_at(player.yard_position) is not None:
                continue
            nearest = self.track.nearest(player.yard_position)
            if nearest is None:
                continue
            logger.debug(
                "%s was stranded at %d, moved to %d",
                player.name,
                player.yard_position,
                nearest.position,
            )
            player.yard_position = nearest.position

    def _finish(self) -> None:
        for bone in self.bones.values():
            if bone.holder_id is not None:
                bone.release()
        self.actions_this_turn = 0
        self._change_status(Status.FINISHED)
        logger.info("Game finished. Scores: %s", self.scores())

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status


def _validate_setup(
    player_count: int, player_names: list[str], player_icons: list[str]
) -> None:
    if not MIN_PLAYERS <= player_count <= MAX_PLAYERS:
        raise GameSetupError(
            f"Game requires {MIN_PLAYERS}-{MAX_PLAYERS} players, got {player_count}."
        )
    if len(player_names) != player_count or len(player_icons) != player_count:
        raise GameSetupError("Player names and icons count must match player count.")
    if any(not name.strip() for name in player_names):
        raise GameSetupError("Player names cannot be empty.")
    if len(set(player_icons)) != len(player_icons):
        raise GameSetupError("Every player needs a different icon.")
