"""
Scripted enemy abilities.

Each ability is a plain EnemyAbility value; archetype definitions list the
ones they use and the enemy turn fires them on their cooldown.
"""

from .types import EnemyAbility, EnemyAbilityContext, EnemyAbilityResult, VisualEffect

FIREBALL_ICON = "\U0001F525"


def _cast_fireball(ctx: EnemyAbilityContext) -> EnemyAbilityResult:
    # Double the caster's damage, flat: armor does not apply to spells
    return EnemyAbilityResult(
        player_damage=ctx.enemy_data.damage * 2,
        visual_effect=VisualEffect(
            type="projectile",
            from_pos=ctx.enemy.pos,
            to_pos=ctx.player_pos,
            icon=FIREBALL_ICON,
        ),
    )


FIREBALL = EnemyAbility(
    id="fireball",
    name="Fireball",
    description="Launches a fireball at the player",
    icon=FIREBALL_ICON,
    turn_interval=3,
    execute=_cast_fireball,
)
