"""Agent components: navigation, motion, maintenance, exploration and tunnels."""
