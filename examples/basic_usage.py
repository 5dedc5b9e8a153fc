"""Basic usage examples for the Grand Prix scraper."""

import asyncio

from f1scraper import GrandPrixScraper, OpenF1Client, ScrapeConfig
from f1scraper.output import generate_gp_filename, json_stats, save_json


async def main() -> None:
    async with OpenF1Client() as f1:
        # Individual resources come back as envelopes
        print("=== Latest meeting ===")
        meeting = await f1.get_latest_meeting()
        if not meeting.success:
            print(f"  Failed: {meeting.error}")
            return
        m = meeting.data
        print(f"  {m.meeting_name} - {m.location}, {m.country_name}")

        scraper = GrandPrixScraper(f1)

        # Race results only
        print("\n=== Latest Grand Prix, race only ===")
        result = await scraper.scrape_latest_grand_prix(ScrapeConfig(session_types=("Race",)))
        if not result.success:
            print(f"  Failed: {result.error}")
            return
        race = result.data.sessions.race
        if race is None:
            print("  No race data yet.")
        else:
            for r in sorted(race.results, key=lambda x: x.position or 99)[:5]:
                driver = race.driver(r.driver_number)
                name = driver.full_name if driver else r.driver_number
                print(f"  P{r.position} {name} ({r.gap_to_leader})")
        save_json(result.data, "data/latest-gp-simple.json")

        # Qualifying and race with every extra
        print("\n=== Latest Grand Prix, complete ===")
        complete = await scraper.scrape_latest_grand_prix(ScrapeConfig(
            session_types=("Qualifying", "Race"),
            include_laps=True,
            include_stints=True,
            include_pits=True,
            include_race_control=True,
        ))
        if complete.success:
            filename = generate_gp_filename(m.meeting_name or "grand-prix", m.year)
            save_json(complete.data, f"data/{filename}")
            stats = json_stats(complete.data)
            print(f"  Size: {stats['size_formatted']}, depth {stats['depth']}")


if __name__ == "__main__":
    asyncio.run(main())
