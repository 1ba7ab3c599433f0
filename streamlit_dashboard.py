import streamlit as st
import pandas as pd
import plotly.express as px

from starfest.errors import ConfigError
from starfest.service import create_service

# --- Page Configuration ---
st.set_page_config(
    page_title="StarFest Dashboard",
    page_icon="⭐",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# Static accent colors (theme-independent)
ACCENT_COLORS = {
    "primary": "#FF6B6B",
    "info": "#3B82F6",
    "warning": "#F59E0B",
    "chart_palette": [
        "#FF6B6B", "#3B82F6", "#10B981", "#F59E0B", "#8B5CF6",
        "#EC4899", "#06B6D4", "#84CC16", "#F97316", "#6366F1"
    ],
}

RANK_ICONS = {1: "👑", 2: "🥈", 3: "🥉"}


def load_service():
    """Fresh service per rerun so newly submitted matches show up."""
    return create_service()


def standings_chart(df_standings: pd.DataFrame):
    fig = px.bar(
        df_standings,
        x='name',
        y='points',
        color='name',
        text='points',
        labels={'name': 'Team', 'points': 'Points'},
        color_discrete_sequence=ACCENT_COLORS["chart_palette"],
    )
    fig.update_layout(
        showlegend=False,
        height=320,
        margin=dict(l=20, r=20, t=30, b=20),
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
    )
    return fig


def stars_chart(df_standings: pd.DataFrame):
    fig = px.bar(
        df_standings,
        x='name',
        y='totalStars',
        labels={'name': 'Team', 'totalStars': 'Stars'},
        color_discrete_sequence=[ACCENT_COLORS["warning"]],
    )
    fig.update_layout(
        height=320,
        margin=dict(l=20, r=20, t=30, b=20),
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
    )
    return fig


# --- Main App ---
def main():
    try:
        service = load_service()
    except ConfigError as e:
        st.error(f"Could not start: {e}")
        return

    current = service.get_current_event()
    if current['status'] != 200:
        st.title("StarFest")
        st.warning("No event is active right now.")
        return

    info = current['info']
    st.title(f"⭐ {info['name']}")

    df_standings = service.queries.team_standings()
    df_players = service.queries.player_leaderboard()

    tab_teams, tab_players, tab_team_detail = st.tabs(["🏆 Standings", "🎮 Players", "👥 Teams"])

    with tab_teams:
        if df_standings.empty:
            st.info("No teams configured for this event.")
        else:
            leader = df_standings.iloc[0]
            col1, col2, col3 = st.columns(3)
            col1.metric("Leader", leader['name'])
            col2.metric("Points", int(leader['points']))
            col3.metric("Matches won", int(leader['matchesWon']))

            display = df_standings.copy()
            display['position'] = display['position'].map(lambda p: f"{RANK_ICONS.get(p, '')} {p}".strip())
            st.dataframe(display, width='stretch', hide_index=True)

            col_points, col_stars = st.columns(2)
            with col_points:
                st.plotly_chart(standings_chart(df_standings), use_container_width=True,
                                config={'displayModeBar': False})
            with col_stars:
                st.plotly_chart(stars_chart(df_standings), use_container_width=True,
                                config={'displayModeBar': False})

    with tab_players:
        if df_players.empty:
            st.info("No matches reported yet.")
        else:
            st.dataframe(
                df_players,
                width='stretch',
                hide_index=True,
                column_config={
                    "winRate": st.column_config.NumberColumn("Win rate", format="%.3f"),
                },
            )

    with tab_team_detail:
        team_ids = list(info['teams'].keys())
        if not team_ids:
            st.info("No teams configured for this event.")
            return
        team_id = st.selectbox(
            "Team",
            options=team_ids,
            format_func=lambda t: info['teams'][t].get('name', t),
        )
        result = service.get_team_stats(team_id)
        if result['status'] != 200:
            st.warning(result['message'])
            return

        stats = result['teamStats']
        col1, col2, col3 = st.columns(3)
        col1.metric("Points", stats['points'])
        col2.metric("Stars", stats['totalStars'])
        col3.metric("Matches won", stats['matchesWon'])

        df_roster = service.queries.player_leaderboard(team_id)
        if df_roster.empty:
            st.info("No players have played for this team yet.")
        else:
            st.dataframe(df_roster, width='stretch', hide_index=True)


if __name__ == "__main__":
    main()
