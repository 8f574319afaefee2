def policy(env):
    # Strategy: for every lane, find the closest obstacle that is still above the
    # player's rear bumper. Pick the lane where that obstacle is farthest away
    # (an empty lane is best), break ties with fuel in the lane, then with the
    # distance from the current lane. Steer towards that lane's centre and stop
    # once within one step of it so the car doesn't jitter.
    controller = env.controller
    state = controller.state
    field = controller.field
    player = state.player

    player_bottom = player.y + player.h
    current = field.lane_of(player.x, player.w)

    clearance = []
    fuel = []
    for lane in range(field.lane_count):
        lane_x = field.lane_x(lane, player.w)
        gaps = [
            player.y - (o.y + o.h)
            for o in state.obstacles
            if field.lane_of(o.x, o.w) == lane and o.y < player_bottom
        ]
        clearance.append(min(gaps) if gaps else float("inf"))
        fuel.append(any(field.lane_of(p.x, p.size) == lane and p.y < player_bottom for p in state.pickups))

    def score(lane):
        return (clearance[lane], fuel[lane], -abs(lane - current))

    # Only lanes reachable without crossing a blocked lane
    target = current
    for lane in sorted(range(field.lane_count), key=score, reverse=True):
        step = 1 if lane > current else -1
        path = range(current + step, lane + step, step) if lane != current else ()
        if all(clearance[i] > player.h for i in path):
            target = lane
            break

    target_x = field.lane_x(target, player.w)
    if target_x < player.x - player.vx / 2:
        return [1, 0]
    if target_x > player.x + player.vx / 2:
        return [0, 1]
    return [0, 0]
