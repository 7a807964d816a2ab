"""Coverage Bounded Context.

Responsible for RF propagation and coverage simulation:
- Value Objects: TowerParameters, Tower, SimulationParameters, CoveragePoint,
  CoverageStatistics, CoverageResult
- Services: signal_strength, to_bars (propagation), generate_coverage_data
  (engine), CoverageAccumulator (statistics reduction)
- Ports: TowerRepository, SimulationRepository, ProgressSubscriber
"""
