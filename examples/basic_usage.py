"""Basic usage: list stoves, read their status, change a setting and put it back."""

import asyncio
import logging

from pyrikafirenet import (
    DailySchedule,
    HeatingSchedule,
    HeatPeriod,
    RikaFirenetClient,
    classify_status,
)


async def main() -> None:
    """List the stoves of an account and play with the first one."""
    logging.basicConfig(level=logging.INFO)

    async with RikaFirenetClient(email="your@email.com", password="your_password") as client:
        stove_ids = await client.list_stoves()
        print(f"Found {len(stove_ids)} stove(s)")

        for stove_id in stove_ids:
            status = await client.status(stove_id)
            print(f"\n{status.name} ({stove_id})")
            print(f"  Status: {classify_status(status)}")
            print(f"  Room temperature: {status.sensors.input_room_temperature}°C")
            print(f"  Target temperature: {status.controls.target_temperature}°C")

        if not stove_ids:
            return

        stove_id = stove_ids[0]
        saved = (await client.status(stove_id)).controls

        await client.set_manual_mode(stove_id, heating_power_percent=30)

        weekdays = DailySchedule.dual(HeatPeriod.of(7, 30, 10, 0), HeatPeriod.of(18, 15, 22, 45))
        weekend = DailySchedule.single(HeatPeriod.of(10, 15, 23, 0))
        await client.enable_schedule(stove_id, HeatingSchedule.week_vs_end_days(weekdays, weekend))
        await client.set_comfort_mode(stove_id, idle_temperature=18, target_temperature=20)

        # Put everything back the way it was
        await client.restore_controls(stove_id, saved)
        await client.logout()


if __name__ == "__main__":
    asyncio.run(main())
