"""
Tests for the owner setup commands in AdminCog.

The command callbacks are called directly with a stand-in interaction that
records what would have been sent to Discord.
"""

import asyncio
from types import SimpleNamespace

from golfbot.cogs.admin import AdminCog
from golfbot.database.database import Database

PARS = " ".join(["4"] * 18)
INDEXES = ",".join(str(index) for index in range(1, 19))


class RecordingResponse:
    def __init__(self):
        self.sent = []

    async def send_message(self, content=None, **kwargs):
        self.sent.append(SimpleNamespace(content=content, **kwargs))


def make_interaction():
    return SimpleNamespace(user=SimpleNamespace(id=1, name="owner"), response=RecordingResponse())


def run_with_cog(tmp_path, scenario):
    async def _run():
        db = Database(f"sqlite+aiosqlite:///{tmp_path / 'tournament.db'}")
        await db.initialize()
        try:
            cog = AdminCog(SimpleNamespace(db=db))
            return await scenario(cog, db)
        finally:
            await db.close()
    return asyncio.run(_run())


async def invoke(cog, command, *args):
    interaction = make_interaction()
    await command.callback(cog, interaction, *args)
    return interaction.response.sent[-1]


def test_tournament_can_be_set_up_from_commands(tmp_path):
    async def scenario(cog, db):
        await invoke(cog, cog.add_course, "Mosley", PARS, INDEXES)
        await invoke(cog, cog.add_team, "Eagles")
        await invoke(cog, cog.add_player, "Ann", 10)
        await invoke(cog, cog.add_player, "Bob", 20)
        await invoke(cog, cog.assign_team, "Ann", "Eagles")
        for hole in range(1, 19):
            await invoke(cog, cog.record_score, "Ann", "Mosley", 1, hole, 4)

        snapshot = await db.load_snapshot()
        assert len(snapshot.holes) == 18
        assert [p.name for p in snapshot.players.values()] == ["Ann", "Bob"]
        assert [m.name for m in snapshot.teams[0].members] == ["Ann"]
        assert len(snapshot.scores_for(snapshot.teams[0].members[0].id, 1)) == 18

    run_with_cog(tmp_path, scenario)


def test_duplicate_names_rejected(tmp_path):
    async def scenario(cog, db):
        await invoke(cog, cog.add_player, "Ann", 10)
        reply = await invoke(cog, cog.add_player, "Ann", 12)
        assert reply.embed.title == "Invalid Input"

        await invoke(cog, cog.add_team, "Eagles")
        reply = await invoke(cog, cog.add_team, "Eagles")
        assert reply.embed.title == "Invalid Input"

        assert (await db.get_player_by_name("Ann")).handicap == 10

    run_with_cog(tmp_path, scenario)


def test_bad_course_layout_reports_error(tmp_path):
    async def scenario(cog, db):
        reply = await invoke(cog, cog.add_course, "Broken", PARS, "1 2 3")
        assert reply.embed is not None
        assert await db.get_course_by_name("Broken") is None

        reply = await invoke(cog, cog.add_course, "Repeat", PARS, " ".join(["1"] * 18))
        assert reply.embed is not None
        assert await db.get_course_by_name("Repeat") is None

    run_with_cog(tmp_path, scenario)


def test_set_active_and_remove_from_team(tmp_path):
    async def scenario(cog, db):
        await invoke(cog, cog.add_team, "Eagles")
        await invoke(cog, cog.add_player, "Ann", 10)
        await invoke(cog, cog.assign_team, "Ann", "Eagles")
        await invoke(cog, cog.assign_team, "Ann", None)
        await invoke(cog, cog.set_active, "Ann", False)

        player = await db.get_player_by_name("Ann")
        assert player.team_id is None
        assert player.active is False

        reply = await invoke(cog, cog.set_active, "Nobody", True)
        assert reply.embed is not None

        reply = await invoke(cog, cog.assign_team, "Ann", "Nobody")
        assert reply.embed is not None

    run_with_cog(tmp_path, scenario)


def test_clear_scores_command(tmp_path):
    async def scenario(cog, db):
        await invoke(cog, cog.add_course, "Mosley", PARS, INDEXES)
        await invoke(cog, cog.add_player, "Ann", 10)
        await invoke(cog, cog.record_score, "Ann", "Mosley", 2, 1, 5)

        reply = await invoke(cog, cog.clear_scores, "Mosley", 2)

        assert "Removed 1 scores" in reply.content
        assert await db.fetch_scores(day_num=2) == []

    run_with_cog(tmp_path, scenario)
