from autonation.content.config import PlayerType, Relation
from autonation.content.constants import ENEMY_MEMORY_TICKS
from autonation.game.commands import AllianceReply, AttackRequest


class BotBehavior:
    """
    Shared decision primitives: enemy memory, ally assistance, alliance replies
    and border attacks. One instance per agent, sharing the agent's random source.
    """

    def __init__(self, random, game, player, trigger_ratio: float, reserve_ratio: float):
        self.random = random
        self.game = game
        self.player = player
        self.trigger_ratio = trigger_ratio
        self.reserve_ratio = reserve_ratio
        self.enemy = None
        self.enemy_updated = 0

    # ---------- Diplomacy ----------
    def handle_alliance_requests(self):
        for request in self.player.incoming_alliance_requests():
            requestor = request.requestor()
            accepted = (
                not requestor.is_traitor()
                and self.player.relation(requestor) >= Relation.NEUTRAL
            )
            self.game.add_execution(AllianceReply(self.player.id, requestor.id, accepted))

    # ---------- Enemy memory ----------
    def _set_new_enemy(self, enemy):
        self.enemy = enemy
        self.enemy_updated = self.game.ticks()

    def _clear_enemy(self):
        self.enemy = None

    def forget_old_enemies(self):
        if self.game.ticks() - self.enemy_updated > ENEMY_MEMORY_TICKS:
            self._clear_enemy()

    def _has_sufficient_troops(self) -> bool:
        max_pop = self.game.config().max_population(self.player)
        if max_pop <= 0:
            return False
        return self.player.population() / max_pop >= self.trigger_ratio

    def _check_incoming_attacks(self):
        largest = 0
        attacker = None
        for attack in self.player.incoming_attacks():
            if attack.troops() <= largest:
                continue
            largest = attack.troops()
            attacker = attack.attacker()
        if attacker is not None:
            self._set_new_enemy(attacker)

    def assist_allies(self):
        for ally in self.player.allies():
            if self.player.relation(ally) < Relation.FRIENDLY:
                continue
            for target in ally.targets():
                if target is self.player or self.player.is_friendly(target):
                    continue
                self._set_new_enemy(target)
                return

    def select_enemy(self):
        if self.enemy is None:
            # Save up troops until we reach the trigger ratio
            if not self._has_sufficient_troops():
                return None

            # Prefer the least dense neighbouring bot
            bots = [
                n for n in self.player.neighbors()
                if n.is_player() and n.type == PlayerType.BOT
            ]
            if bots:
                bots.sort(key=lambda p: p.troops() / max(1, p.num_tiles_owned()))
                self._set_new_enemy(bots[0])

            if self.enemy is None:
                self._check_incoming_attacks()

            if self.enemy is None:
                relations = self.player.all_relations_sorted()
                if relations:
                    most_hated, relation = relations[0]
                    if relation == Relation.HOSTILE:
                        self._set_new_enemy(most_hated)

        # Never keep an ally or teammate as enemy
        if self.enemy is not None and self.player.is_friendly(self.enemy):
            self._clear_enemy()
        return self.enemy

    # ---------- Attacks ----------
    def send_attack(self, target):
        if target.is_player() and self.player.is_on_same_team(target):
            return False
        max_pop = self.game.config().max_population(self.player)
        max_troops = max_pop * self.player.target_troop_ratio()
        troops = self.player.troops() - max_troops * self.reserve_ratio
        if troops < 1:
            return False
        target_id = target.id if target.is_player() else None
        self.game.add_execution(AttackRequest(self.player.id, target_id, troops))
        return True
